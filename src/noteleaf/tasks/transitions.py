# src/noteleaf/tasks/transitions.py

from __future__ import annotations

"""
Optional status state machine.

Records accept any status string; this layer adds per-kind allow-lists for
callers that want enforced transitions. It never stamps completion
timestamps (end/finished/watched): that stays the caller's decision.

Task tables keep the two taxonomies apart. Moving a task from legacy to
current statuses goes through task_api.migrate_legacy_status() instead.
"""

import logging
from collections.abc import Mapping

from ..core.ports import Stateful
from ..errors import TransitionError
from ..models.media_models import Book, Movie, TVShow
from ..models.task_models import Task

logger = logging.getLogger(__name__)

TransitionTable = Mapping[str, frozenset[str]]


def _table(**edges: tuple[str, ...]) -> dict[str, frozenset[str]]:
    return {k.replace("_", "-"): frozenset(v) for k, v in edges.items()}


TASK_TRANSITIONS: TransitionTable = _table(
    todo=("in-progress", "blocked", "done", "abandoned"),
    in_progress=("todo", "blocked", "done", "abandoned"),
    blocked=("todo", "in-progress", "abandoned"),
    done=("todo",),
    abandoned=("todo",),
    pending=("completed", "deleted"),
    completed=("pending",),
    deleted=("pending",),
)

BOOK_TRANSITIONS: TransitionTable = _table(
    queued=("reading", "removed"),
    reading=("queued", "finished", "removed"),
    finished=("reading", "removed"),
    removed=("queued",),
)

MOVIE_TRANSITIONS: TransitionTable = _table(
    queued=("watched", "removed"),
    watched=("queued", "removed"),
    removed=("queued",),
)

TV_SHOW_TRANSITIONS: TransitionTable = _table(
    queued=("watching", "watched", "removed"),
    watching=("queued", "watched", "removed"),
    watched=("watching", "removed"),
    removed=("queued",),
)

DEFAULT_TABLES: dict[type, TransitionTable] = {
    Task: TASK_TRANSITIONS,
    Book: BOOK_TRANSITIONS,
    Movie: MOVIE_TRANSITIONS,
    TVShow: TV_SHOW_TRANSITIONS,
}


class StatusMachine:
    def __init__(self, tables: Mapping[type, TransitionTable] | None = None) -> None:
        self._tables = dict(DEFAULT_TABLES if tables is None else tables)

    def table_for(self, record: Stateful) -> TransitionTable:
        for kind in type(record).__mro__:
            table = self._tables.get(kind)
            if table is not None:
                return table
        raise TransitionError(f"no transition table for {type(record).__name__}")

    def allowed(self, record: Stateful) -> frozenset[str]:
        """Statuses reachable from the record's current status."""
        return self.table_for(record).get(record.status, frozenset())

    def can_transition(self, record: Stateful, new_status: str) -> bool:
        if new_status not in record.valid_statuses():
            return False
        return new_status in self.allowed(record)

    def transition(self, record: Stateful, new_status: str) -> str:
        """Set the new status if allowed; returns the previous one."""
        old = record.status
        if not self.can_transition(record, new_status):
            logger.info(
                "Rejected transition kind=%s %s -> %s",
                type(record).__name__,
                old or "<empty>",
                new_status,
            )
            raise TransitionError(
                f"{type(record).__name__}: cannot move from {old!r} to {new_status!r}"
            )
        record.status = new_status
        logger.debug("Transition kind=%s %s -> %s", type(record).__name__, old, new_status)
        return old
