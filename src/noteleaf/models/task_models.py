# src/noteleaf/models/task_models.py

from __future__ import annotations

"""
Task record (TaskWarrior-inspired).

Status uses two taxonomies that share one field:
- current: todo, in-progress, blocked, done, abandoned
- legacy:  pending, completed, deleted

Their predicates do not overlap: a "done" task is NOT is_completed(), which
only recognizes "completed". Callers pick one taxonomy per task; see
tasks.task_api.migrate_legacy_status() for the explicit migration step.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import ClassVar, NewType

from ..core.ports import Model, Stateful
from .codecs import as_utc, decode_strings, encode_strings, omitempty, zero_time

# Recurrence rule in RFC 5545 form, e.g. "FREQ=WEEKLY;BYDAY=MO,WE,FR".
# Opaque here: never parsed, only checked for presence.
RRule = NewType("RRule", str)


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    DONE = "done"
    ABANDONED = "abandoned"

    # legacy
    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"


CURRENT_STATUSES: tuple[str, ...] = ("todo", "in-progress", "blocked", "done", "abandoned")
LEGACY_STATUSES: tuple[str, ...] = ("pending", "completed", "deleted")
TASK_STATUSES: tuple[str, ...] = CURRENT_STATUSES + LEGACY_STATUSES


class TaskPriority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


PRIORITY_NUMERIC_MIN = 1
PRIORITY_NUMERIC_MAX = 5

_NAMED_PRIORITIES = frozenset(p.value for p in TaskPriority)
_NUMERIC_PRIORITIES = frozenset(str(n) for n in range(PRIORITY_NUMERIC_MIN, PRIORITY_NUMERIC_MAX + 1))

# Named and numeric encodings share 1..5; letters use 1..26 (A=26 .. Z=1).
# The ranges overlap: A..U outrank every named or numeric priority, V ties "High".
_PRIORITY_WEIGHTS: dict[str, int] = {
    TaskPriority.HIGH: 5,
    "5": 5,
    TaskPriority.MEDIUM: 4,
    "4": 4,
    TaskPriority.LOW: 3,
    "3": 3,
    "2": 2,
    "1": 1,
    "A": 26,
    "B": 25,
    "C": 24,
}


def _is_letter_priority(priority: str) -> bool:
    return len(priority) == 1 and "A" <= priority <= "Z"


def is_valid_priority(priority: str) -> bool:
    """Empty, High/Medium/Low, a single letter A-Z, or a single digit 1-5."""
    if priority == "":
        return True
    if priority in _NAMED_PRIORITIES:
        return True
    if _is_letter_priority(priority):
        return True
    return priority in _NUMERIC_PRIORITIES


def priority_weight(priority: str) -> int:
    """Sort weight for a priority string; higher means more important, 0 for unknown."""
    weight = _PRIORITY_WEIGHTS.get(priority)
    if weight is not None:
        return weight
    if _is_letter_priority(priority):
        return ord("Z") - ord(priority) + 1
    return 0


URGENCY_PRIORITY_BONUS = 1.0
URGENCY_OVERDUE_BONUS = 2.0
URGENCY_TAGGED_BONUS = 0.5


@dataclass(slots=True)
class Task(Model, Stateful):
    table_name: ClassVar[str] = "tasks"

    id: int = 0
    uuid: str = ""
    description: str = ""
    status: str = ""
    priority: str = omitempty("")
    project: str = omitempty("")
    context: str = omitempty("")
    tags: list[str] | None = omitempty()
    due: datetime | None = omitempty()
    entry: datetime = zero_time()
    modified: datetime = zero_time()
    end: datetime | None = omitempty()  # completion time, never set automatically
    start: datetime | None = omitempty()
    annotations: list[str] | None = omitempty()
    recur: RRule = omitempty(RRule(""))
    until: datetime | None = omitempty()  # recurrence end
    parent_uuid: str | None = omitempty()  # template task for recurring instances
    depends_on: list[str] | None = omitempty()  # UUIDs, order kept, duplicates allowed

    # ---- persistence contract ----

    def set_id(self, id: int) -> None:
        self.id = id

    @property
    def created_at(self) -> datetime:
        return self.entry

    @created_at.setter
    def created_at(self, value: datetime) -> None:
        self.entry = value

    @property
    def updated_at(self) -> datetime:
        return self.modified

    @updated_at.setter
    def updated_at(self, value: datetime) -> None:
        self.modified = value

    # ---- collection columns ----

    def marshal_tags(self) -> str:
        return encode_strings(self.tags)

    def unmarshal_tags(self, data: str) -> None:
        self.tags = decode_strings(data)

    def marshal_annotations(self) -> str:
        return encode_strings(self.annotations)

    def unmarshal_annotations(self, data: str) -> None:
        self.annotations = decode_strings(data)

    # ---- status ----

    def valid_statuses(self) -> tuple[str, ...]:
        return TASK_STATUSES

    def is_valid_status(self) -> bool:
        return self.status in TASK_STATUSES

    def is_todo(self) -> bool:
        return self.status == TaskStatus.TODO

    def is_in_progress(self) -> bool:
        return self.status == TaskStatus.IN_PROGRESS

    def is_blocked(self) -> bool:
        return self.status == TaskStatus.BLOCKED

    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def is_abandoned(self) -> bool:
        return self.status == TaskStatus.ABANDONED

    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING

    def is_completed(self) -> bool:
        """Legacy "completed" only; "done" does not count."""
        return self.status == TaskStatus.COMPLETED

    def is_deleted(self) -> bool:
        return self.status == TaskStatus.DELETED

    # ---- priority / urgency ----

    def has_priority(self) -> bool:
        return self.priority != ""

    def is_valid_priority(self) -> bool:
        return is_valid_priority(self.priority)

    def priority_weight(self) -> int:
        return priority_weight(self.priority)

    def is_started(self) -> bool:
        return self.start is not None

    def has_due_date(self) -> bool:
        return self.due is not None

    def is_overdue(self, now: datetime) -> bool:
        # Only the legacy predicate is consulted: a "done" task can be overdue.
        return self.due is not None and as_utc(now) > as_utc(self.due) and not self.is_completed()

    def urgency(self, now: datetime) -> float:
        """
        Additive ranking signal:
        +1.0 if any priority is set (weight is ignored),
        +2.0 if overdue,
        +0.5 if tagged.
        """
        score = 0.0
        if self.has_priority():
            score += URGENCY_PRIORITY_BONUS
        if self.is_overdue(now):
            score += URGENCY_OVERDUE_BONUS
        if self.tags:
            score += URGENCY_TAGGED_BONUS
        return score

    # ---- recurrence ----

    def is_recurring(self) -> bool:
        return self.recur != ""

    def is_recur_expired(self, now: datetime) -> bool:
        return self.until is not None and as_utc(now) > as_utc(self.until)

    # ---- dependencies ----

    def has_dependencies(self) -> bool:
        return bool(self.depends_on)

    def blocks(self, other: Task) -> bool:
        """True if `other` lists this task's UUID among its dependencies."""
        return self.uuid in (other.depends_on or ())
