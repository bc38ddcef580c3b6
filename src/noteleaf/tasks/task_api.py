# src/noteleaf/tasks/task_api.py

from __future__ import annotations

import logging
import uuid as uuid_lib
from collections.abc import Iterable
from datetime import datetime, timezone

from ..config import TAXONOMY_CURRENT, TAXONOMY_LEGACY, get_settings
from ..models.task_models import LEGACY_STATUSES, RRule, Task, TaskStatus

logger = logging.getLogger(__name__)

LEGACY_TO_CURRENT: dict[str, str] = {
    TaskStatus.PENDING.value: TaskStatus.TODO.value,
    TaskStatus.COMPLETED.value: TaskStatus.DONE.value,
    TaskStatus.DELETED.value: TaskStatus.ABANDONED.value,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> str:
    return str(uuid_lib.uuid4())


def initial_status(taxonomy: str | None = None) -> str:
    """Opening status for a new task in the configured taxonomy."""
    if taxonomy is None:
        taxonomy = get_settings().status_taxonomy
    return TaskStatus.PENDING.value if taxonomy == TAXONOMY_LEGACY else TaskStatus.TODO.value


def new_task(
    description: str,
    *,
    priority: str = "",
    project: str = "",
    context: str = "",
    tags: Iterable[str] | None = None,
    due: datetime | None = None,
    recur: str = "",
    until: datetime | None = None,
    taxonomy: str | None = None,
    now: datetime | None = None,
) -> Task:
    """
    Convenience constructor: fresh UUID, opening status, entry/modified = now.

    id stays 0; storage assigns it on first insert.
    """
    if now is None:
        now = _utcnow()
    return Task(
        uuid=new_uuid(),
        description=description,
        status=initial_status(taxonomy),
        priority=priority,
        project=project,
        context=context,
        tags=list(tags) if tags else None,
        due=due,
        entry=now,
        modified=now,
        recur=RRule(recur),
        until=until,
    )


def migrate_legacy_status(task: Task) -> bool:
    """
    Move a legacy status (pending/completed/deleted) to its current equivalent.

    Returns True if the status changed.
    """
    target = LEGACY_TO_CURRENT.get(task.status)
    if target is None:
        return False
    logger.debug("Migrating task=%s status %s -> %s", task.uuid, task.status, target)
    task.status = target
    return True


def add_annotation(task: Task, text: str, *, now: datetime | None = None) -> None:
    """Append an annotation and bump modified."""
    text = text.strip()
    if not text:
        return
    if task.annotations is None:
        task.annotations = []
    task.annotations.append(text)
    task.modified = now or _utcnow()


def spawn_occurrence(template: Task, *, due: datetime | None, now: datetime | None = None) -> Task | None:
    """
    Create the next instance of a recurring task.

    The recurrence rule is not interpreted: the caller computes `due` from
    template.recur. Returns None when the template does not recur or its
    recurrence has ended.
    """
    if now is None:
        now = _utcnow()
    if not template.is_recurring():
        return None
    if template.is_recur_expired(now):
        logger.info("Recurrence expired for template=%s until=%s", template.uuid, template.until)
        return None

    taxonomy = TAXONOMY_LEGACY if template.status in LEGACY_STATUSES else TAXONOMY_CURRENT
    instance = new_task(
        template.description,
        priority=template.priority,
        project=template.project,
        context=template.context,
        tags=template.tags,
        due=due,
        recur=template.recur,
        until=template.until,
        taxonomy=taxonomy,
        now=now,
    )
    instance.parent_uuid = template.uuid
    logger.info("Spawned occurrence %s of template=%s due=%s", instance.uuid, template.uuid, due)
    return instance
