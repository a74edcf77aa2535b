"""Seed catalog loaded into every new store."""

from relationship_wise.models.catalog import Assessment, LearningModule

_IMAGE_PARAMS = (
    "?ixlib=rb-4.0.3&ixid=MnwxMjA3fDB8MHxwaG90by1wYWdlfHx8fGVufDB8fHx8"
    "&auto=format&fit=crop&w=100&h=100"
)

LEARNING_MODULES: list[dict] = [
    {
        "id": "1",
        "title": "Active Listening Skills",
        "description": (
            "Learn how to truly listen and understand others in conversations. "
            "Practice techniques for better engagement."
        ),
        "difficulty": "Beginner",
        "duration": 25,
        "exercises": 5,
        "content": {
            "lessons": [
                {
                    "title": "Introduction to Active Listening",
                    "content": (
                        "Active listening is a fundamental skill for healthy "
                        "relationships..."
                    ),
                    "exercises": [
                        {
                            "question": "What are the key components of active listening?",
                            "type": "multiple_choice",
                        }
                    ],
                }
            ]
        },
        "image_url": "https://images.unsplash.com/photo-1522202176988-66273c2fd55f"
        + _IMAGE_PARAMS,
    },
    {
        "id": "2",
        "title": "Emotional Intelligence",
        "description": (
            "Understand and manage emotions effectively in relationships. "
            "Learn to recognize emotional patterns."
        ),
        "difficulty": "Intermediate",
        "duration": 40,
        "exercises": 8,
        "content": {
            "lessons": [
                {
                    "title": "Understanding Emotions",
                    "content": (
                        "Emotional intelligence involves recognizing and managing "
                        "emotions..."
                    ),
                    "exercises": [
                        {
                            "question": "Identify the emotion in this scenario",
                            "type": "multiple_choice",
                        }
                    ],
                }
            ]
        },
        "image_url": "https://images.unsplash.com/photo-1551601651-2a8555f1a136"
        + _IMAGE_PARAMS,
    },
    {
        "id": "3",
        "title": "Conflict Resolution",
        "description": (
            "Navigate disagreements constructively and find mutually beneficial "
            "solutions in relationships."
        ),
        "difficulty": "Advanced",
        "duration": 35,
        "exercises": 6,
        "content": {
            "lessons": [
                {
                    "title": "Understanding Conflict",
                    "content": (
                        "Conflict is a natural part of relationships when handled "
                        "properly..."
                    ),
                    "exercises": [
                        {
                            "question": "What is the first step in resolving conflict?",
                            "type": "text",
                        }
                    ],
                }
            ]
        },
        "image_url": "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2"
        + _IMAGE_PARAMS,
    },
    {
        "id": "4",
        "title": "Building Trust",
        "description": (
            "Learn the fundamentals of building and maintaining trust in personal "
            "and professional relationships."
        ),
        "difficulty": "Beginner",
        "duration": 30,
        "exercises": 7,
        "content": {
            "lessons": [
                {
                    "title": "Trust Foundations",
                    "content": (
                        "Trust is built through consistent actions and honest "
                        "communication..."
                    ),
                    "exercises": [
                        {"question": "What actions build trust?", "type": "multiple_choice"}
                    ],
                }
            ]
        },
        "image_url": "https://images.unsplash.com/photo-1556761175-b413da4baf72"
        + _IMAGE_PARAMS,
    },
]

ASSESSMENTS: list[dict] = [
    {
        "id": "1",
        "title": "Communication Style",
        "description": (
            "Discover your natural communication patterns and learn how to adapt "
            "them for better relationships."
        ),
        "duration": 15,
        "questions": [
            {
                "id": "1",
                "question": "When someone disagrees with you, you typically:",
                "type": "multiple_choice",
                "options": [
                    "Listen to their perspective first",
                    "Defend your position immediately",
                    "Try to find common ground",
                    "Avoid the conversation",
                ],
                "category": "communication",
            }
        ],
    },
    {
        "id": "2",
        "title": "Social Awareness",
        "description": (
            "Evaluate your ability to read social cues and understand others' "
            "emotions and intentions."
        ),
        "duration": 20,
        "questions": [
            {
                "id": "1",
                "question": (
                    "How well can you tell when someone is uncomfortable in a "
                    "social situation?"
                ),
                "type": "scale",
                "category": "social_awareness",
            }
        ],
    },
    {
        "id": "3",
        "title": "Conflict Resolution",
        "description": (
            "Assess your approach to handling disagreements and your skills in "
            "finding solutions."
        ),
        "duration": 18,
        "questions": [
            {
                "id": "1",
                "question": "Describe how you would handle a disagreement with a close friend:",
                "type": "text",
                "category": "conflict_resolution",
            }
        ],
    },
]


def seed_learning_modules() -> list[LearningModule]:
    return [LearningModule.model_validate(data) for data in LEARNING_MODULES]


def seed_assessments() -> list[Assessment]:
    return [Assessment.model_validate(data) for data in ASSESSMENTS]
