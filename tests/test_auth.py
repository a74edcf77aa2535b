"""Tests for password hashing, registration and login."""

import inspect
from unittest.mock import patch

import bcrypt
import pytest

from relationship_wise.api.auth import login, register
from relationship_wise.auth import authenticate, hash_password, register_user, verify_password
from relationship_wise.errors import BadRequestError, ConflictError, UnauthenticatedError

ROUNDS = 4


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("s3cret-pass", rounds=ROUNDS)
        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_too_long_password_rejected(self):
        with pytest.raises(BadRequestError):
            hash_password("x" * 73, rounds=ROUNDS)

    def test_garbage_hash_does_not_verify(self):
        assert not verify_password("whatever", "not-a-bcrypt-hash")


class TestRegisterAndLogin:
    def test_register_then_login(self, store):
        user = register_user(
            store, "carol@example.com", "password1", "Carol", 41,
            preferences={"learning_goals": ["trust"]}, rounds=ROUNDS,
        )
        assert user.preferences.learning_goals == ["trust"]
        assert authenticate(store, "carol@example.com", "password1").id == user.id

    def test_duplicate_email(self, store):
        register_user(store, "dave@example.com", "password1", "Dave", 22, rounds=ROUNDS)
        with pytest.raises(ConflictError, match="User already exists"):
            register_user(store, "dave@example.com", "password2", "Dave 2", 23, rounds=ROUNDS)

    def test_bad_credentials_are_indistinguishable(self, store):
        register_user(store, "erin@example.com", "password1", "Erin", 30, rounds=ROUNDS)
        with pytest.raises(UnauthenticatedError) as wrong_password:
            authenticate(store, "erin@example.com", "password2")
        with pytest.raises(UnauthenticatedError) as unknown_email:
            authenticate(store, "nobody@example.com", "password1")
        assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"

    def test_unknown_email_still_runs_bcrypt(self, store):
        with patch("relationship_wise.auth.bcrypt.checkpw", wraps=bcrypt.checkpw) as checkpw:
            with pytest.raises(UnauthenticatedError):
                authenticate(store, "nobody@example.com", "password1", rounds=ROUNDS)
        checkpw.assert_called_once()

    def test_dummy_hash_password_does_not_log_in(self, store):
        with pytest.raises(UnauthenticatedError):
            authenticate(store, "nobody@example.com", "not-a-real-password", rounds=ROUNDS)


class TestRouteDeclarations:
    @pytest.mark.parametrize("endpoint", [register, login])
    def test_bcrypt_routes_run_in_threadpool(self, endpoint):
        assert not inspect.iscoroutinefunction(endpoint)
