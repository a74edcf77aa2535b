"""Ownership guard for user-scoped entities.

Rows that exist but belong to another user are reported exactly like rows
that do not exist, so a caller cannot probe for other users' ids.
"""

from relationship_wise.errors import NotFoundError, UnauthenticatedError
from relationship_wise.models.assessment import AssessmentResult
from relationship_wise.models.chat import ChatSession
from relationship_wise.models.user import User
from relationship_wise.storage.memory import NOT_FOUND_MESSAGES, EntityKind, MemoryStore


def require_user(store: MemoryStore, user_id: str | None) -> User:
    """Resolve the authenticated caller, or raise ``UnauthenticatedError``."""
    if not user_id:
        raise UnauthenticatedError()
    try:
        return store.get_user(user_id)
    except NotFoundError:
        # Session cookie outlived the account.
        raise UnauthenticatedError() from None


def owned(store: MemoryStore, kind: EntityKind, entity_id: str, user_id: str):
    """Fetch an entity whose ``user_id`` is the caller's, else NotFoundError."""
    entity = store.get(kind, entity_id)
    if entity.user_id != user_id:
        raise NotFoundError(NOT_FOUND_MESSAGES[kind])
    return entity


def owned_chat_session(store: MemoryStore, user_id: str, session_id: str) -> ChatSession:
    return owned(store, EntityKind.CHAT_SESSION, session_id, user_id)


def owned_assessment_result(
    store: MemoryStore, user_id: str, result_id: str
) -> AssessmentResult:
    return owned(store, EntityKind.ASSESSMENT_RESULT, result_id, user_id)
