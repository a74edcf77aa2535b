"""Application factory.

``create_app`` builds the store, the AI transforms and the orchestrators once
and hangs them on ``app.state``; tests pass their own store and fakes.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from relationship_wise.api.errors import register_exception_handlers
from relationship_wise.api.routes import router
from relationship_wise.assessment.llm_analyzer import AssessmentAnalyzer
from relationship_wise.assessment.scorer import AssessmentScorer
from relationship_wise.config import DEFAULT_SESSION_SECRET, Settings
from relationship_wise.conversation.coach import CoachingModel
from relationship_wise.conversation.turn import CoachingTurn
from relationship_wise.llm.client import JsonChatClient
from relationship_wise.storage.memory import MemoryStore

logger = structlog.get_logger()

SESSION_COOKIE = "relationshipwise_session"


def create_app(
    settings: Settings,
    store: MemoryStore | None = None,
    coach: CoachingModel | None = None,
    analyzer: AssessmentAnalyzer | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings.
        store: Entity store; a seeded ``MemoryStore`` when omitted.
        coach: Coaching model; built from OpenAI settings when omitted.
        analyzer: Assessment analyzer; built from OpenAI settings when omitted.
    """
    if settings.is_production and settings.session_secret == DEFAULT_SESSION_SECRET:
        logger.warning("default_session_secret_in_production")

    store = store if store is not None else MemoryStore()
    if coach is None:
        coach = CoachingModel(
            JsonChatClient(
                api_key=settings.openai_api_key,
                model=settings.coaching_model,
                timeout=settings.llm_timeout_seconds,
                max_retries=settings.llm_max_retries,
            ),
            max_tokens=settings.coaching_max_tokens,
        )
    if analyzer is None:
        analyzer = AssessmentAnalyzer(
            JsonChatClient(
                api_key=settings.openai_api_key,
                model=settings.analysis_model,
                timeout=settings.llm_timeout_seconds,
                max_retries=settings.llm_max_retries,
            ),
            max_tokens=settings.analysis_max_tokens,
        )

    app = FastAPI(title="RelationshipWise", version="0.1.0")
    app.state.settings = settings
    app.state.store = store
    app.state.coaching_turn = CoachingTurn(
        store, coach, timeout_seconds=settings.llm_timeout_seconds
    )
    app.state.assessment_scorer = AssessmentScorer(
        store, analyzer, timeout_seconds=settings.llm_timeout_seconds
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=SESSION_COOKIE,
        max_age=settings.session_max_age_seconds,
        https_only=settings.is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router)
    return app
