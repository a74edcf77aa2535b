"""Create-or-update policy for per-skill user progress."""

from typing import Any

import structlog

from relationship_wise.models.progress import UserProgress
from relationship_wise.storage.memory import EntityKind, MemoryStore

logger = structlog.get_logger()

# Fields a caller may set; identity and timestamps are owned by the store.
UPSERT_FIELDS = frozenset({"module_id", "progress", "completed_exercises"})


def upsert_progress(
    store: MemoryStore,
    user_id: str,
    skill_type: str,
    fields: dict[str, Any],
) -> UserProgress:
    """Record progress for ``(user_id, skill_type)``.

    An existing row keeps every value not present in ``fields`` and gets a new
    ``last_activity``. A missing row is created with ``progress`` 0 and no
    completed exercises unless ``fields`` says otherwise. Repeating a call
    with the same payload only moves the timestamp.

    Args:
        store: Entity store.
        user_id: Owner of the progress row.
        skill_type: Free-form skill tag (e.g. "communication").
        fields: Partial progress fields; ``None`` values are ignored.

    Returns:
        The stored row after the write.
    """
    updates = {
        key: value
        for key, value in fields.items()
        if key in UPSERT_FIELDS and value is not None
    }
    with store.atomic():
        existing = store.get_progress_by_skill(user_id, skill_type)
        if existing is not None:
            progress = store.update(EntityKind.USER_PROGRESS, existing.id, updates)
            logger.debug("progress_updated", user_id=user_id, skill_type=skill_type)
            return progress

        progress = store.create(
            EntityKind.USER_PROGRESS,
            {
                "progress": 0,
                "completed_exercises": [],
                **updates,
                "user_id": user_id,
                "skill_type": skill_type,
            },
        )
        logger.info("progress_created", user_id=user_id, skill_type=skill_type)
        return progress
