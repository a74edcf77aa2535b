"""Chat session routes. Every session lookup is scoped to the caller."""

from fastapi import APIRouter

from relationship_wise.access import owned_chat_session
from relationship_wise.api.deps import Coaching, CurrentUser, Store
from relationship_wise.api.schemas import ChatCreateRequest, ChatMessageRequest, ChatTurnResponse
from relationship_wise.models.chat import ChatSession

router = APIRouter(prefix="/chats", tags=["chats"])


@router.get("")
async def list_chats(user: CurrentUser, store: Store) -> list[ChatSession]:
    """Caller's sessions, most recently active first."""
    return store.list_user_chat_sessions(user.id)


@router.post("")
async def create_chat(body: ChatCreateRequest, user: CurrentUser, store: Store) -> ChatSession:
    return store.create_chat_session(user.id, body.title)


@router.get("/{session_id}")
async def get_chat(session_id: str, user: CurrentUser, store: Store) -> ChatSession:
    return owned_chat_session(store, user.id, session_id)


@router.post("/{session_id}/messages")
async def send_message(
    session_id: str, body: ChatMessageRequest, user: CurrentUser, coaching: Coaching
) -> ChatTurnResponse:
    """Send a message to the coach and return the updated session."""
    result = await coaching.send(user.id, session_id, body.message)
    return ChatTurnResponse(
        session=result.session, suggestions=result.suggestions, feedback=result.feedback
    )
