"""Tests for the in-memory entity store."""

from datetime import timedelta

import pytest

from relationship_wise.errors import BadRequestError, ConflictError, NotFoundError
from relationship_wise.models.chat import ChatMessage, MessageRole
from relationship_wise.storage.memory import EntityKind, MemoryStore


class TestSeedCatalog:
    def test_modules_seeded(self, store):
        modules = store.list_learning_modules()
        assert sorted(m.id for m in modules) == ["1", "2", "3", "4"]

    def test_active_listening_module(self, store):
        module = store.get_learning_module("1")
        assert module.title == "Active Listening Skills"
        assert module.difficulty == "Beginner"
        assert module.duration == 25
        assert module.exercises == 5
        assert module.content.lessons[0].title == "Introduction to Active Listening"

    def test_assessments_seeded(self, store):
        assessments = store.list_assessments()
        assert sorted(a.id for a in assessments) == ["1", "2", "3"]
        assert store.get_assessment("2").questions[0].type == "scale"

    def test_unseeded_store_is_empty(self):
        assert MemoryStore(seed=False).list_learning_modules() == []

    def test_catalog_is_read_only(self, store):
        with pytest.raises(BadRequestError):
            store.update(EntityKind.LEARNING_MODULE, "1", {"title": "Changed"})
        with pytest.raises(BadRequestError):
            store.create(EntityKind.ASSESSMENT, {"title": "New"})
        assert store.get_learning_module("1").title == "Active Listening Skills"


class TestGenericOperations:
    def test_get_unknown_id_raises_not_found(self, store):
        with pytest.raises(NotFoundError, match="Chat session not found"):
            store.get(EntityKind.CHAT_SESSION, "missing")

    def test_update_unknown_id_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            store.update(EntityKind.USER, "missing", {"name": "x"})

    def test_create_assigns_id_and_timestamps(self, store, alice):
        session = store.create_chat_session(alice.id, "First chat")
        assert session.id
        assert session.user_id == alice.id
        assert session.created_at == session.updated_at
        assert session.messages == []

    def test_ids_are_unique(self, store, alice):
        ids = {store.create_chat_session(alice.id, f"chat {i}").id for i in range(20)}
        assert len(ids) == 20

    def test_select_filters_by_attribute(self, store, alice, bob):
        store.create_chat_session(alice.id, "a1")
        store.create_chat_session(alice.id, "a2")
        store.create_chat_session(bob.id, "b1")
        titles = sorted(s.title for s in store.select(EntityKind.CHAT_SESSION, user_id=alice.id))
        assert titles == ["a1", "a2"]

    def test_create_rejects_invalid_fields(self, store, alice):
        with pytest.raises(BadRequestError):
            store.create(EntityKind.USER_PROGRESS, {"user_id": alice.id})

    def test_returned_entities_are_copies(self, store, alice):
        session = store.create_chat_session(alice.id, "Original")
        session.title = "Mutated"
        session.messages.append(ChatMessage(role=MessageRole.USER, content="sneaky"))
        stored = store.get_chat_session(session.id)
        assert stored.title == "Original"
        assert stored.messages == []

    def test_get_returns_fresh_copy_each_time(self, store):
        first = store.get_learning_module("1")
        first.content.lessons.clear()
        assert len(store.get_learning_module("1").content.lessons) == 1

    def test_update_keeps_id(self, store, alice):
        session = store.create_chat_session(alice.id, "Chat")
        updated = store.update_chat_session(session.id, {"id": "other", "title": "Renamed"})
        assert updated.id == session.id
        assert updated.title == "Renamed"

    def test_update_bumps_updated_at(self, store, alice):
        session = store.create_chat_session(alice.id, "Chat")
        updated = store.update_chat_session(session.id, {"title": "Renamed"})
        assert updated.updated_at > session.updated_at
        assert updated.created_at == session.created_at


class TestUsers:
    def test_get_user_by_email_round_trip(self, store, alice):
        assert store.get_user_by_email("alice@example.com") == alice

    def test_email_lookup_ignores_case_and_whitespace(self, store, alice):
        assert store.get_user_by_email("  ALICE@example.com ").id == alice.id

    def test_unknown_email_returns_none(self, store):
        assert store.get_user_by_email("nobody@example.com") is None

    def test_duplicate_email_conflicts(self, store, alice):
        with pytest.raises(ConflictError):
            store.create_user({
                "email": "alice@example.com",
                "password_hash": "x",
                "name": "Other Alice",
                "age": 40,
            })
        assert len(store.select(EntityKind.USER)) == 1

    def test_update_email_to_taken_address_conflicts(self, store, alice, bob):
        with pytest.raises(ConflictError):
            store.update_user(bob.id, {"email": "alice@example.com"})
        assert store.get_user_by_email("bob@example.com").id == bob.id

    def test_update_email_moves_index(self, store, alice):
        store.update_user(alice.id, {"email": "alice@new.example.com"})
        assert store.get_user_by_email("alice@example.com") is None
        assert store.get_user_by_email("alice@new.example.com").id == alice.id


class TestChatSessions:
    def test_list_sorted_by_most_recent_update(self, store, alice):
        older = store.create_chat_session(alice.id, "older")
        newer = store.create_chat_session(alice.id, "newer")
        store.update_chat_session(older.id, {"title": "older, touched"})
        assert [s.id for s in store.list_user_chat_sessions(alice.id)] == [older.id, newer.id]

    def test_append_assigns_sequence_numbers(self, store, alice):
        session = store.create_chat_session(alice.id, "Chat")
        store.append_chat_messages(session.id, [
            ChatMessage(role=MessageRole.USER, content="one"),
            ChatMessage(role=MessageRole.ASSISTANT, content="two"),
        ])
        updated = store.append_chat_messages(session.id, [
            ChatMessage(role=MessageRole.USER, content="three"),
        ])
        assert [m.seq for m in updated.messages] == [1, 2, 3]
        assert [m.content for m in updated.messages] == ["one", "two", "three"]

    def test_append_keeps_timestamps_non_decreasing(self, store, alice):
        session = store.create_chat_session(alice.id, "Chat")
        late = ChatMessage(role=MessageRole.USER, content="late")
        early = ChatMessage(role=MessageRole.ASSISTANT, content="early")
        early.timestamp = late.timestamp - timedelta(days=1)
        updated = store.append_chat_messages(session.id, [late, early])
        assert updated.messages[0].timestamp <= updated.messages[1].timestamp

    def test_update_cannot_rewrite_message_log(self, store, alice):
        session = store.create_chat_session(alice.id, "Chat")
        store.append_chat_messages(session.id, [
            ChatMessage(role=MessageRole.USER, content="a"),
            ChatMessage(role=MessageRole.ASSISTANT, content="b"),
        ])
        with pytest.raises(BadRequestError):
            store.update_chat_session(session.id, {
                "messages": [{"role": "assistant", "content": "forged", "seq": 0}],
            })

        updated = store.append_chat_messages(session.id, [
            ChatMessage(role=MessageRole.USER, content="c"),
        ])
        assert [m.content for m in updated.messages] == ["a", "b", "c"]
        assert [m.seq for m in updated.messages] == [1, 2, 3]

    def test_update_cannot_change_owner(self, store, alice, bob):
        session = store.create_chat_session(alice.id, "Private")
        with pytest.raises(BadRequestError):
            store.update_chat_session(session.id, {"user_id": bob.id})
        assert store.get_chat_session(session.id).user_id == alice.id
        assert store.list_user_chat_sessions(bob.id) == []

    def test_append_to_unknown_session(self, store):
        with pytest.raises(NotFoundError):
            store.append_chat_messages("missing", [])


class TestAssessmentResults:
    def test_results_never_overwrite(self, store, alice):
        fields = {
            "user_id": alice.id,
            "assessment_id": "1",
            "answers": {"1": "Listen to their perspective first"},
            "scores": {"communication": 80},
        }
        first = store.create_assessment_result(fields)
        second = store.create_assessment_result(fields)
        assert first.id != second.id
        results = store.list_user_assessment_results(alice.id)
        assert [r.id for r in results] == [second.id, first.id]

    def test_owner_is_fixed(self, store, alice, bob):
        result = store.create_assessment_result({
            "user_id": alice.id, "assessment_id": "1", "answers": {"1": "x"},
        })
        with pytest.raises(BadRequestError):
            store.update(EntityKind.ASSESSMENT_RESULT, result.id, {"user_id": bob.id})
        assert store.list_user_assessment_results(bob.id) == []

    def test_results_scoped_to_user(self, store, alice, bob):
        store.create_assessment_result({
            "user_id": alice.id, "assessment_id": "1", "answers": {"1": "x"},
        })
        assert store.list_user_assessment_results(bob.id) == []
