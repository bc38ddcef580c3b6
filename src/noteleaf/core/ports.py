# src/noteleaf/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Two families live here:
- Model: the persistence contract every record satisfies. The external
  repository layer only ever talks to records through it.
- Capabilities: Stateful -> Queueable / Completable -> Progressable.
  Generic queries (render a queue, list completed items by time) iterate
  over mixed record kinds through these, without per-kind branching.

Record kinds declare conformance by subclassing explicitly. The protocols
are runtime_checkable so generic code can filter a mixed collection with
isinstance().
"""

from datetime import datetime
from typing import Any, ClassVar, Protocol, TypeVar, runtime_checkable

M = TypeVar("M", bound="Model")


@runtime_checkable
class Model(Protocol):
    """
    Persistence contract.

    - id == 0 means "not stored yet"; storage assigns it on first insert
    - table_name is a constant per record kind
    - created_at / updated_at are written back by storage after insert/update
    """

    table_name: ClassVar[str]
    id: int

    def set_id(self, id: int) -> None: ...

    @property
    def created_at(self) -> datetime: ...

    @created_at.setter
    def created_at(self, value: datetime) -> None: ...

    @property
    def updated_at(self) -> datetime: ...

    @updated_at.setter
    def updated_at(self, value: datetime) -> None: ...


@runtime_checkable
class Stateful(Protocol):
    """Records with a status string and a known set of valid statuses."""

    status: str

    def valid_statuses(self) -> tuple[str, ...]: ...


@runtime_checkable
class Queueable(Stateful, Protocol):
    """Media that can sit in a "to consume later" queue."""

    def is_queued(self) -> bool: ...


@runtime_checkable
class Completable(Stateful, Protocol):
    """Media that can be finished/watched, with the time it happened."""

    def is_completed(self) -> bool: ...
    def completion_time(self) -> datetime | None: ...


@runtime_checkable
class Progressable(Completable, Protocol):
    """Completable media with a 0-100 progress percentage."""

    progress: int

    def get_progress(self) -> int: ...
    def set_progress(self, progress: int) -> None: ...


# Most specific first; capabilities() reports every level that applies.
CAPABILITIES: tuple[tuple[str, type], ...] = (
    ("progressable", Progressable),
    ("completable", Completable),
    ("queueable", Queueable),
    ("stateful", Stateful),
)


def capabilities(record: Any) -> frozenset[str]:
    """Names of the capability levels the record's kind declares."""
    kind = type(record)
    return frozenset(name for name, proto in CAPABILITIES if proto in kind.__mro__)


class ModelRepo(Protocol):
    """
    Boundary of the external repository layer.

    Implementations own SQL/row mapping; they call set_id() and the timestamp
    setters to write storage-assigned values back into the record, and use
    the collection codecs for tags/annotations/tracks columns.
    Callers serialize writes to the same record (e.g. per-id locking).
    """

    def create(self, model: Model) -> int: ...
    def get(self, model_type: type[M], id: int) -> M | None: ...
    def update(self, model: Model) -> None: ...
    def delete(self, model_type: type[Model], id: int) -> None: ...
