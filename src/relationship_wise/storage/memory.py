"""In-memory entity store.

One ``MemoryStore`` is created per application and handed to routes and
orchestrators; nothing here is module-level state. Every read returns a deep
copy, so callers can only change stored data through ``create``/``update``
(or the typed helpers built on them).
"""

import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from relationship_wise.errors import BadRequestError, ConflictError, NotFoundError
from relationship_wise.models.assessment import AssessmentResult
from relationship_wise.models.catalog import Assessment, LearningModule
from relationship_wise.models.chat import ChatMessage, ChatSession
from relationship_wise.models.progress import UserProgress
from relationship_wise.models.user import User
from relationship_wise.storage.seed import seed_assessments, seed_learning_modules

logger = structlog.get_logger()


class EntityKind(StrEnum):
    USER = "user"
    CHAT_SESSION = "chat_session"
    LEARNING_MODULE = "learning_module"
    USER_PROGRESS = "user_progress"
    ASSESSMENT = "assessment"
    ASSESSMENT_RESULT = "assessment_result"


MODELS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.USER: User,
    EntityKind.CHAT_SESSION: ChatSession,
    EntityKind.LEARNING_MODULE: LearningModule,
    EntityKind.USER_PROGRESS: UserProgress,
    EntityKind.ASSESSMENT: Assessment,
    EntityKind.ASSESSMENT_RESULT: AssessmentResult,
}

CATALOG_KINDS = frozenset({EntityKind.LEARNING_MODULE, EntityKind.ASSESSMENT})

# Stamped with the current time on create.
_CREATED_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.USER: ("created_at",),
    EntityKind.CHAT_SESSION: ("created_at", "updated_at"),
    EntityKind.USER_PROGRESS: ("last_activity",),
    EntityKind.ASSESSMENT_RESULT: ("completed_at",),
}

# Moved forward on every update, never backwards.
_TOUCHED_FIELDS: dict[EntityKind, str] = {
    EntityKind.CHAT_SESSION: "updated_at",
    EntityKind.USER_PROGRESS: "last_activity",
}

# Rejected by the generic update: the chat log only grows through
# append_chat_messages, and owned rows never change owner.
_LOCKED_FIELDS: dict[EntityKind, frozenset[str]] = {
    EntityKind.CHAT_SESSION: frozenset({"messages", "user_id"}),
    EntityKind.USER_PROGRESS: frozenset({"user_id"}),
    EntityKind.ASSESSMENT_RESULT: frozenset({"user_id"}),
}

NOT_FOUND_MESSAGES: dict[EntityKind, str] = {
    EntityKind.USER: "User not found",
    EntityKind.CHAT_SESSION: "Chat session not found",
    EntityKind.LEARNING_MODULE: "Module not found",
    EntityKind.USER_PROGRESS: "Progress not found",
    EntityKind.ASSESSMENT: "Assessment not found",
    EntityKind.ASSESSMENT_RESULT: "Assessment result not found",
}

_MISSING = object()


def _advance(previous: datetime | None) -> datetime:
    """Current time, nudged past ``previous`` when the clock has not moved."""
    now = datetime.now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class MemoryStore:
    """Dictionary-backed store for all six entity kinds.

    Args:
        seed: Load the learning module and assessment catalog.
    """

    def __init__(self, seed: bool = True):
        self._lock = threading.RLock()
        self._tables: dict[EntityKind, dict[str, BaseModel]] = {kind: {} for kind in EntityKind}
        self._email_index: dict[str, str] = {}
        self._progress_index: dict[tuple[str, str], str] = {}
        self._last_stamp: datetime | None = None
        if seed:
            for module in seed_learning_modules():
                self._tables[EntityKind.LEARNING_MODULE][module.id] = module
            for assessment in seed_assessments():
                self._tables[EntityKind.ASSESSMENT][assessment.id] = assessment
            logger.debug(
                "catalog_seeded",
                modules=len(self._tables[EntityKind.LEARNING_MODULE]),
                assessments=len(self._tables[EntityKind.ASSESSMENT]),
            )

    def _tick(self) -> datetime:
        """Store-wide timestamp that never repeats or goes backwards."""
        self._last_stamp = _advance(self._last_stamp)
        return self._last_stamp

    @contextmanager
    def atomic(self) -> Iterator["MemoryStore"]:
        """Hold the store lock across several operations."""
        with self._lock:
            yield self

    # ------------------------------------------------------------------
    # Generic operations
    # ------------------------------------------------------------------

    def get(self, kind: EntityKind, entity_id: str) -> BaseModel:
        with self._lock:
            entity = self._tables[kind].get(entity_id)
            if entity is None:
                raise NotFoundError(NOT_FOUND_MESSAGES[kind])
            return entity.model_copy(deep=True)

    def select(self, kind: EntityKind, **filters: Any) -> list[BaseModel]:
        """All entities of ``kind`` whose attributes equal every filter value."""
        with self._lock:
            return [
                entity.model_copy(deep=True)
                for entity in self._tables[kind].values()
                if all(getattr(entity, key, _MISSING) == value for key, value in filters.items())
            ]

    def create(self, kind: EntityKind, fields: dict[str, Any]) -> BaseModel:
        """Create an entity with a fresh id and creation timestamp."""
        if kind in CATALOG_KINDS:
            raise BadRequestError(f"{kind} entries are read-only")
        with self._lock:
            data = dict(fields)
            data["id"] = str(uuid.uuid4())
            now = self._tick()
            for name in _CREATED_FIELDS.get(kind, ()):
                data[name] = now
            entity = self._validate(kind, data)
            self._reindex(kind, None, entity)
            self._tables[kind][entity.id] = entity
            logger.debug("entity_created", kind=str(kind), id=entity.id)
            return entity.model_copy(deep=True)

    def update(self, kind: EntityKind, entity_id: str, fields: dict[str, Any]) -> BaseModel:
        """Merge ``fields`` into an existing entity. The id never changes."""
        if kind in CATALOG_KINDS:
            raise BadRequestError(f"{kind} entries are read-only")
        locked = _LOCKED_FIELDS.get(kind, frozenset()) & fields.keys()
        if locked:
            raise BadRequestError(f"Cannot update {', '.join(sorted(locked))} on {kind}")
        with self._lock:
            current = self._tables[kind].get(entity_id)
            if current is None:
                raise NotFoundError(NOT_FOUND_MESSAGES[kind])
            return self._replace(kind, current, fields)

    def _replace(self, kind: EntityKind, current: BaseModel, fields: dict[str, Any]) -> BaseModel:
        """Store ``current`` merged with ``fields``. Caller holds the lock."""
        data = current.model_dump()
        data.update(fields)
        data["id"] = current.id
        touched = _TOUCHED_FIELDS.get(kind)
        if touched is not None:
            data[touched] = self._tick()
        entity = self._validate(kind, data)
        self._reindex(kind, current, entity)
        self._tables[kind][current.id] = entity
        return entity.model_copy(deep=True)

    def _validate(self, kind: EntityKind, data: dict[str, Any]) -> BaseModel:
        try:
            # Detach from any nested models the caller still holds.
            return MODELS[kind].model_validate(data).model_copy(deep=True)
        except ValidationError as e:
            raise BadRequestError(str(e)) from e

    def _reindex(self, kind: EntityKind, old: BaseModel | None, new: BaseModel) -> None:
        """Maintain secondary indexes; raise ConflictError on a duplicate key."""
        if kind is EntityKind.USER:
            old_key = _normalize_email(old.email) if old is not None else None
            new_key = _normalize_email(new.email)
            if new_key != old_key and new_key in self._email_index:
                raise ConflictError("User already exists")
            if old_key is not None:
                self._email_index.pop(old_key, None)
            self._email_index[new_key] = new.id
        elif kind is EntityKind.USER_PROGRESS:
            old_key = (old.user_id, old.skill_type) if old is not None else None
            new_key = (new.user_id, new.skill_type)
            if new_key != old_key and new_key in self._progress_index:
                raise ConflictError("Progress for this skill already exists")
            if old_key is not None:
                self._progress_index.pop(old_key, None)
            self._progress_index[new_key] = new.id

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> User:
        return self.get(EntityKind.USER, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._email_index.get(_normalize_email(email))
            if user_id is None:
                return None
            return self.get(EntityKind.USER, user_id)

    def create_user(self, fields: dict[str, Any]) -> User:
        return self.create(EntityKind.USER, fields)

    def update_user(self, user_id: str, fields: dict[str, Any]) -> User:
        return self.update(EntityKind.USER, user_id, fields)

    # ------------------------------------------------------------------
    # Chat sessions
    # ------------------------------------------------------------------

    def create_chat_session(self, user_id: str, title: str) -> ChatSession:
        return self.create(EntityKind.CHAT_SESSION, {"user_id": user_id, "title": title})

    def get_chat_session(self, session_id: str) -> ChatSession:
        return self.get(EntityKind.CHAT_SESSION, session_id)

    def list_user_chat_sessions(self, user_id: str) -> list[ChatSession]:
        """Sessions owned by ``user_id``, most recently updated first."""
        sessions = self.select(EntityKind.CHAT_SESSION, user_id=user_id)
        return sorted(sessions, key=lambda s: s.updated_at, reverse=True)

    def update_chat_session(self, session_id: str, fields: dict[str, Any]) -> ChatSession:
        return self.update(EntityKind.CHAT_SESSION, session_id, fields)

    def append_chat_messages(
        self, session_id: str, messages: list[ChatMessage]
    ) -> ChatSession:
        """Append messages to the end of a session's log as one operation.

        Each message gets the next sequence number, and its timestamp is
        clamped so timestamps never decrease along the log.
        """
        with self._lock:
            current = self._tables[EntityKind.CHAT_SESSION].get(session_id)
            if current is None:
                raise NotFoundError(NOT_FOUND_MESSAGES[EntityKind.CHAT_SESSION])
            log = list(current.messages)
            seq = current.last_seq
            last_time = log[-1].timestamp if log else None
            for message in messages:
                seq += 1
                timestamp = message.timestamp
                if last_time is not None and timestamp < last_time:
                    timestamp = last_time
                log.append(message.model_copy(update={"seq": seq, "timestamp": timestamp}))
                last_time = timestamp
            return self._replace(EntityKind.CHAT_SESSION, current, {"messages": log})

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_learning_modules(self) -> list[LearningModule]:
        return self.select(EntityKind.LEARNING_MODULE)

    def get_learning_module(self, module_id: str) -> LearningModule:
        return self.get(EntityKind.LEARNING_MODULE, module_id)

    def list_assessments(self) -> list[Assessment]:
        return self.select(EntityKind.ASSESSMENT)

    def get_assessment(self, assessment_id: str) -> Assessment:
        return self.get(EntityKind.ASSESSMENT, assessment_id)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def list_user_progress(self, user_id: str) -> list[UserProgress]:
        return self.select(EntityKind.USER_PROGRESS, user_id=user_id)

    def get_progress_by_skill(self, user_id: str, skill_type: str) -> UserProgress | None:
        with self._lock:
            progress_id = self._progress_index.get((user_id, skill_type))
            if progress_id is None:
                return None
            return self.get(EntityKind.USER_PROGRESS, progress_id)

    # ------------------------------------------------------------------
    # Assessment results
    # ------------------------------------------------------------------

    def create_assessment_result(self, fields: dict[str, Any]) -> AssessmentResult:
        return self.create(EntityKind.ASSESSMENT_RESULT, fields)

    def list_user_assessment_results(self, user_id: str) -> list[AssessmentResult]:
        """Results for ``user_id``, newest first."""
        results = self.select(EntityKind.ASSESSMENT_RESULT, user_id=user_id)
        return sorted(results, key=lambda r: r.completed_at, reverse=True)
