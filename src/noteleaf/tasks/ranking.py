# src/noteleaf/tasks/ranking.py

from __future__ import annotations

"""
Generic queries over mixed record collections.

Everything here goes through the capability interfaces only, so a list of
books, movies, shows and tasks can be passed in as-is; records that lack a
capability are skipped.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import TypeVar

from ..core.ports import Completable, Queueable, Stateful
from ..models.codecs import as_utc
from ..models.task_models import Task

S = TypeVar("S", bound=Stateful)


def _declares(record: object, capability: type) -> bool:
    return capability in type(record).__mro__


def queued(items: Iterable[object]) -> list[Queueable]:
    """Queueable records currently in the queue, in input order."""
    return [r for r in items if _declares(r, Queueable) and r.is_queued()]  # type: ignore[attr-defined]


def completed_by_time(items: Iterable[object], *, newest_first: bool = True) -> list[Completable]:
    """Completed records ordered by completion time; records without one come last."""
    done: list[Completable] = [
        r for r in items if _declares(r, Completable) and r.is_completed()  # type: ignore[attr-defined]
    ]
    with_time = [r for r in done if r.completion_time() is not None]
    without_time = [r for r in done if r.completion_time() is None]
    with_time.sort(key=lambda r: as_utc(r.completion_time()), reverse=newest_first)  # type: ignore[arg-type, return-value]
    return with_time + without_time


def with_status(items: Iterable[S], status: str) -> list[S]:
    return [r for r in items if _declares(r, Stateful) and r.status == status]


def invalid_status(items: Iterable[S]) -> list[S]:
    """Records whose status is outside their kind's valid set."""
    return [r for r in items if _declares(r, Stateful) and r.status not in r.valid_statuses()]


def sort_by_priority(tasks: Iterable[Task]) -> list[Task]:
    """Highest priority weight first; equal weights keep input order."""
    return sorted(tasks, key=lambda t: t.priority_weight(), reverse=True)


def rank_by_urgency(tasks: Iterable[Task], now: datetime) -> list[Task]:
    """Most urgent first; ties broken by priority weight, then input order."""
    return sorted(tasks, key=lambda t: (t.urgency(now), t.priority_weight()), reverse=True)
