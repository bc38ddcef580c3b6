# src/noteleaf/models/media_models.py

from __future__ import annotations

"""
Media queue records: Book, Movie, TVShow.

These kinds have a single "added" timestamp. It serves as both created_at
and updated_at: writing either one overwrites the same field.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import ClassVar

from ..core.ports import Completable, Model, Progressable, Queueable
from ..errors import ValidationError
from .codecs import omitempty, zero_time

PROGRESS_MIN = 0
PROGRESS_MAX = 100


class BookStatus(StrEnum):
    QUEUED = "queued"
    READING = "reading"
    FINISHED = "finished"
    REMOVED = "removed"


class MovieStatus(StrEnum):
    QUEUED = "queued"
    WATCHED = "watched"
    REMOVED = "removed"


class TVShowStatus(StrEnum):
    QUEUED = "queued"
    WATCHING = "watching"
    WATCHED = "watched"
    REMOVED = "removed"


BOOK_STATUSES: tuple[str, ...] = tuple(s.value for s in BookStatus)
MOVIE_STATUSES: tuple[str, ...] = tuple(s.value for s in MovieStatus)
TV_SHOW_STATUSES: tuple[str, ...] = tuple(s.value for s in TVShowStatus)


class _AddedTimestamp:
    """created_at/updated_at both backed by the `added` field."""

    __slots__ = ()

    added: datetime

    def set_id(self, id: int) -> None:
        self.id = id  # type: ignore[attr-defined]

    @property
    def created_at(self) -> datetime:
        return self.added

    @created_at.setter
    def created_at(self, value: datetime) -> None:
        self.added = value

    @property
    def updated_at(self) -> datetime:
        return self.added

    @updated_at.setter
    def updated_at(self, value: datetime) -> None:
        self.added = value


@dataclass(slots=True)
class Book(_AddedTimestamp, Model, Progressable, Queueable):
    table_name: ClassVar[str] = "books"

    id: int = 0
    title: str = ""
    author: str = omitempty("")
    status: str = ""
    # Range is enforced by set_progress() only, not on direct assignment.
    progress: int = 0
    pages: int = omitempty(0)
    rating: float = omitempty(0.0)
    notes: str = omitempty("")
    added: datetime = zero_time()
    started: datetime | None = omitempty()
    finished: datetime | None = omitempty()

    def valid_statuses(self) -> tuple[str, ...]:
        return BOOK_STATUSES

    def is_valid_status(self) -> bool:
        return self.status in BOOK_STATUSES

    def is_queued(self) -> bool:
        return self.status == BookStatus.QUEUED

    def is_reading(self) -> bool:
        return self.status == BookStatus.READING

    def is_finished(self) -> bool:
        return self.status == BookStatus.FINISHED

    def is_completed(self) -> bool:
        return self.is_finished()

    def completion_time(self) -> datetime | None:
        return self.finished

    def progress_percent(self) -> int:
        return self.progress

    def get_progress(self) -> int:
        return self.progress

    def set_progress(self, progress: int) -> None:
        if progress < PROGRESS_MIN or progress > PROGRESS_MAX:
            raise ValidationError(
                f"progress must be between {PROGRESS_MIN} and {PROGRESS_MAX}, got {progress}"
            )
        self.progress = progress


@dataclass(slots=True)
class Movie(_AddedTimestamp, Model, Completable, Queueable):
    table_name: ClassVar[str] = "movies"

    id: int = 0
    title: str = ""
    year: int = omitempty(0)
    status: str = ""
    rating: float = omitempty(0.0)
    notes: str = omitempty("")
    added: datetime = zero_time()
    watched: datetime | None = omitempty()

    def valid_statuses(self) -> tuple[str, ...]:
        return MOVIE_STATUSES

    def is_valid_status(self) -> bool:
        return self.status in MOVIE_STATUSES

    def is_queued(self) -> bool:
        return self.status == MovieStatus.QUEUED

    def is_watched(self) -> bool:
        return self.status == MovieStatus.WATCHED

    def is_completed(self) -> bool:
        return self.is_watched()

    def completion_time(self) -> datetime | None:
        return self.watched


@dataclass(slots=True)
class TVShow(_AddedTimestamp, Model, Completable, Queueable):
    table_name: ClassVar[str] = "tv_shows"

    id: int = 0
    title: str = ""
    season: int = omitempty(0)
    episode: int = omitempty(0)
    status: str = ""
    rating: float = omitempty(0.0)
    notes: str = omitempty("")
    added: datetime = zero_time()
    last_watched: datetime | None = omitempty()

    def valid_statuses(self) -> tuple[str, ...]:
        return TV_SHOW_STATUSES

    def is_valid_status(self) -> bool:
        return self.status in TV_SHOW_STATUSES

    def is_queued(self) -> bool:
        return self.status == TVShowStatus.QUEUED

    def is_watching(self) -> bool:
        return self.status == TVShowStatus.WATCHING

    def is_watched(self) -> bool:
        return self.status == TVShowStatus.WATCHED

    def is_completed(self) -> bool:
        return self.is_watched()

    def completion_time(self) -> datetime | None:
        """Last time an episode was watched."""
        return self.last_watched
