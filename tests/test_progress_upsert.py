"""Tests for the per-skill progress upsert policy."""

import pytest

from relationship_wise.errors import BadRequestError
from relationship_wise.storage.memory import EntityKind
from relationship_wise.storage.progress import upsert_progress


class TestCreate:
    def test_creates_row_with_defaults(self, store, alice):
        progress = upsert_progress(store, alice.id, "empathy", {})
        assert progress.user_id == alice.id
        assert progress.skill_type == "empathy"
        assert progress.progress == 0
        assert progress.completed_exercises == []
        assert progress.module_id is None

    def test_creates_row_with_given_fields(self, store, alice):
        progress = upsert_progress(
            store, alice.id, "communication",
            {"progress": 40, "module_id": "1", "completed_exercises": ["ex-1"]},
        )
        assert progress.progress == 40
        assert progress.module_id == "1"
        assert progress.completed_exercises == ["ex-1"]

    def test_caller_cannot_override_identity(self, store, alice, bob):
        progress = upsert_progress(
            store, alice.id, "empathy", {"user_id": bob.id, "skill_type": "other", "id": "x"}
        )
        assert progress.user_id == alice.id
        assert progress.skill_type == "empathy"
        assert progress.id != "x"

    def test_store_update_cannot_move_row_to_other_user(self, store, alice, bob):
        progress = upsert_progress(store, alice.id, "empathy", {"progress": 10})
        with pytest.raises(BadRequestError):
            store.update(EntityKind.USER_PROGRESS, progress.id, {"user_id": bob.id})
        assert store.list_user_progress(bob.id) == []
        assert store.get_progress_by_skill(alice.id, "empathy").id == progress.id

    def test_out_of_range_progress_rejected(self, store, alice):
        with pytest.raises(BadRequestError):
            upsert_progress(store, alice.id, "empathy", {"progress": 150})
        assert store.list_user_progress(alice.id) == []


class TestUpdate:
    def test_identical_calls_keep_one_row_and_advance_timestamp(self, store, alice):
        payload = {"progress": 60, "completed_exercises": ["ex-1", "ex-2"]}
        first = upsert_progress(store, alice.id, "communication", payload)
        second = upsert_progress(store, alice.id, "communication", payload)

        rows = store.list_user_progress(alice.id)
        assert len(rows) == 1
        assert second.id == first.id
        assert second.progress == 60
        assert second.completed_exercises == ["ex-1", "ex-2"]
        assert second.last_activity > first.last_activity

    def test_absent_fields_keep_prior_values(self, store, alice):
        upsert_progress(
            store, alice.id, "empathy",
            {"progress": 30, "module_id": "2", "completed_exercises": ["a"]},
        )
        updated = upsert_progress(store, alice.id, "empathy", {"progress": 50})
        assert updated.progress == 50
        assert updated.module_id == "2"
        assert updated.completed_exercises == ["a"]

    def test_none_values_are_ignored(self, store, alice):
        upsert_progress(store, alice.id, "empathy", {"progress": 30})
        updated = upsert_progress(store, alice.id, "empathy", {"progress": None})
        assert updated.progress == 30

    def test_rows_are_per_user_and_skill(self, store, alice, bob):
        upsert_progress(store, alice.id, "empathy", {"progress": 10})
        upsert_progress(store, alice.id, "trust", {"progress": 20})
        upsert_progress(store, bob.id, "empathy", {"progress": 30})
        assert len(store.list_user_progress(alice.id)) == 2
        assert store.get_progress_by_skill(bob.id, "empathy").progress == 30
        assert store.get_progress_by_skill(bob.id, "trust") is None
