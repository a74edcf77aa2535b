"""Account routes: register, login, logout, current user."""

import structlog
from fastapi import APIRouter, Request

from relationship_wise.api.deps import SESSION_USER_KEY, AppSettings, CurrentUser, Store
from relationship_wise.api.schemas import LoginRequest, RegisterRequest
from relationship_wise.auth import authenticate, register_user

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["auth"])


def _start_session(request: Request, user_id: str) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user_id


@router.post("/register")
def register(
    body: RegisterRequest, request: Request, store: Store, settings: AppSettings
) -> dict:
    """Create an account and log it in."""
    user = register_user(
        store,
        email=body.email,
        password=body.password,
        name=body.name,
        age=body.age,
        preferences=body.preferences.model_dump() if body.preferences else None,
        rounds=settings.bcrypt_rounds,
    )
    _start_session(request, user.id)
    return {"user": user.public()}


@router.post("/login")
def login(
    body: LoginRequest, request: Request, store: Store, settings: AppSettings
) -> dict:
    user = authenticate(store, body.email, body.password, rounds=settings.bcrypt_rounds)
    _start_session(request, user.id)
    return {"user": user.public()}


@router.post("/logout")
async def logout(request: Request) -> dict:
    request.session.clear()
    return {"message": "Logged out successfully"}


@router.get("/me")
async def me(user: CurrentUser) -> dict:
    return {"user": user.public()}
