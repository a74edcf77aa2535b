"""FastAPI dependencies: store handle and the authenticated caller.

The store and orchestrators live on ``app.state`` (built once in
``create_app``). The caller's id comes from the signed session cookie and is
resolved before any user-scoped route touches the store.
"""

from typing import Annotated

from fastapi import Depends, Request

from relationship_wise.access import require_user
from relationship_wise.assessment.scorer import AssessmentScorer
from relationship_wise.config import Settings
from relationship_wise.conversation.turn import CoachingTurn
from relationship_wise.models.user import User
from relationship_wise.storage.memory import MemoryStore

SESSION_USER_KEY = "user_id"


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_coaching_turn(request: Request) -> CoachingTurn:
    return request.app.state.coaching_turn


def get_assessment_scorer(request: Request) -> AssessmentScorer:
    return request.app.state.assessment_scorer


def get_current_user(
    request: Request,
    store: Annotated[MemoryStore, Depends(get_store)],
) -> User:
    """Return the logged-in user; 401 when there is no valid session."""
    return require_user(store, request.session.get(SESSION_USER_KEY))


Store = Annotated[MemoryStore, Depends(get_store)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
CurrentUser = Annotated[User, Depends(get_current_user)]
Coaching = Annotated[CoachingTurn, Depends(get_coaching_turn)]
Scorer = Annotated[AssessmentScorer, Depends(get_assessment_scorer)]
