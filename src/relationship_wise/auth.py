"""Registration, login and password hashing."""

import functools
from typing import Any

import bcrypt
import structlog

from relationship_wise.errors import BadRequestError, UnauthenticatedError
from relationship_wise.models.user import User
from relationship_wise.storage.memory import MemoryStore

logger = structlog.get_logger()

# bcrypt only looks at the first 72 bytes.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise BadRequestError("Password is too long")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


@functools.cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("not-a-real-password", rounds=rounds)


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("password_hash_invalid")
        return False


def register_user(
    store: MemoryStore,
    email: str,
    password: str,
    name: str,
    age: int,
    preferences: dict[str, Any] | None = None,
    rounds: int = 12,
) -> User:
    """Create an account. Raises ConflictError when the email is taken."""
    fields: dict[str, Any] = {
        "email": email.strip(),
        "password_hash": hash_password(password, rounds=rounds),
        "name": name,
        "age": age,
    }
    if preferences is not None:
        fields["preferences"] = preferences
    user = store.create_user(fields)
    logger.info("user_registered", user_id=user.id)
    return user


def authenticate(store: MemoryStore, email: str, password: str, rounds: int = 12) -> User:
    """Check credentials; unknown email and wrong password fail the same way.

    An unknown email is still checked against a throwaway hash of the same
    cost.
    """
    user = store.get_user_by_email(email)
    password_hash = user.password_hash if user is not None else _dummy_hash(rounds)
    if not verify_password(password, password_hash) or user is None:
        logger.info("login_failed")
        raise UnauthenticatedError("Invalid credentials")
    logger.info("user_logged_in", user_id=user.id)
    return user
