"""LLM-based analysis of assessment answers."""

import structlog

from relationship_wise.llm.client import JsonChatClient
from relationship_wise.models.assessment import AnsweredQuestion

logger = structlog.get_logger()

ANALYSIS_PROMPT = """\
Analyze these assessment answers for relationship skills evaluation:

Questions and Answers:
{answers}

Respond ONLY with a JSON object:
{{
    "scores": {{"<category>": <0-100>, ...}},
    "recommendations": ["<specific improvement recommendation>", ...]
}}

Score every category you find. Focus on these skill categories:
- communication: How well they communicate
- social_awareness: Ability to read social cues
- conflict_resolution: Handling disagreements
- empathy: Understanding others' feelings
- trust_building: Creating trusted relationships
"""


def build_analysis_prompt(answer_lines: list[str]) -> str:
    return ANALYSIS_PROMPT.format(answers="\n".join(answer_lines))


class AssessmentAnalyzer:
    """Scores answered questions by category and suggests next steps.

    Args:
        llm: JSON chat client.
        max_tokens: Completion token limit.
    """

    def __init__(self, llm: JsonChatClient, max_tokens: int = 600):
        self.llm = llm
        self.max_tokens = max_tokens

    async def analyze(self, answered: list[AnsweredQuestion]) -> dict:
        """Return the model's raw {"scores", "recommendations"} object."""
        prompt = build_analysis_prompt([a.prompt_line() for a in answered])
        result = await self.llm.complete_json(
            [{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
            temperature=0.3,
        )
        logger.info("assessment_analysis_complete", question_count=len(answered))
        return result
