"""Shared fixtures: a seeded store and two users."""

import pytest

from relationship_wise.models.user import User
from relationship_wise.storage.memory import MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


def _make_user(store: MemoryStore, email: str, name: str, age: int) -> User:
    return store.create_user({
        "email": email,
        "password_hash": "not-a-real-hash",
        "name": name,
        "age": age,
        "preferences": {"communication_style": "direct", "learning_goals": ["listening"]},
    })


@pytest.fixture
def alice(store) -> User:
    return _make_user(store, "alice@example.com", "Alice", 29)


@pytest.fixture
def bob(store) -> User:
    return _make_user(store, "bob@example.com", "Bob", 34)
