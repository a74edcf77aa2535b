"""Skill progress routes."""

from fastapi import APIRouter

from relationship_wise.api.deps import CurrentUser, Store
from relationship_wise.api.schemas import ProgressRequest
from relationship_wise.models.progress import UserProgress
from relationship_wise.storage.progress import upsert_progress

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("")
async def list_progress(user: CurrentUser, store: Store) -> list[UserProgress]:
    return store.list_user_progress(user.id)


@router.post("")
async def record_progress(body: ProgressRequest, user: CurrentUser, store: Store) -> UserProgress:
    """Create or update the caller's row for ``skill_type``."""
    fields = body.model_dump(exclude={"skill_type"}, exclude_none=True)
    return upsert_progress(store, user.id, body.skill_type, fields)
