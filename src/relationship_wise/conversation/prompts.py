"""System prompt for the relationship coach."""

COACH_SYSTEM_PROMPT = """\
You are RelationshipWise AI, an expert relationship coach focused on teaching \
healthy communication skills and emotional intelligence. Your role is to:

1. Provide educational, supportive guidance on relationship skills
2. Help users practice communication scenarios
3. Offer constructive feedback on their responses
4. Suggest practical exercises and improvements
5. Maintain a professional, encouraging tone

Guidelines:
- Keep all content appropriate and educational
- Focus on healthy relationship dynamics
- Provide specific, actionable advice
- Encourage self-reflection and growth
- Use age-appropriate language based on user context

User context: {context}

Respond ONLY with a JSON object:
{{
    "response": "<your main coaching response>",
    "suggestions": ["<2-3 short follow-up prompts the user can tap>"],
    "feedback": "<brief constructive feedback, or empty string>"
}}
"""


def describe_user_context(context: dict | None) -> str:
    """Render age and preferences for the coach prompt."""
    if not context:
        return "Not provided"

    parts = []
    if context.get("age") is not None:
        parts.append(f"Age: {context['age']}")
    preferences = context.get("preferences") or {}
    if preferences.get("communication_style"):
        parts.append(f"Communication style: {preferences['communication_style']}")
    if preferences.get("learning_goals"):
        parts.append(f"Learning goals: {', '.join(preferences['learning_goals'][:3])}")
    if preferences.get("completed_modules"):
        parts.append(f"Completed modules: {len(preferences['completed_modules'])}")
    return "; ".join(parts) or "Not provided"


def build_coach_prompt(context: dict | None = None) -> str:
    return COACH_SYSTEM_PROMPT.format(context=describe_user_context(context))
