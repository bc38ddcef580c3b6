# src/noteleaf/models/aux_models.py

from __future__ import annotations

"""
Auxiliary records: notes, albums, time entries, articles.

They satisfy the persistence contract but have no status lifecycle,
so none of them implements a capability interface.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import ClassVar
from urllib.parse import urlsplit

from ..core.ports import Model
from .codecs import as_utc, decode_strings, encode_strings, omitempty, zero_time

ALBUM_RATING_MIN = 1
ALBUM_RATING_MAX = 5


class _CreatedModified:
    """created_at/updated_at backed by `created`/`modified`."""

    __slots__ = ()

    created: datetime
    modified: datetime

    def set_id(self, id: int) -> None:
        self.id = id  # type: ignore[attr-defined]

    @property
    def created_at(self) -> datetime:
        return self.created

    @created_at.setter
    def created_at(self, value: datetime) -> None:
        self.created = value

    @property
    def updated_at(self) -> datetime:
        return self.modified

    @updated_at.setter
    def updated_at(self, value: datetime) -> None:
        self.modified = value


@dataclass(slots=True)
class Note(_CreatedModified, Model):
    table_name: ClassVar[str] = "notes"

    id: int = 0
    title: str = ""
    content: str = ""
    tags: list[str] | None = omitempty()
    archived: bool = False
    created: datetime = zero_time()
    modified: datetime = zero_time()
    file_path: str = omitempty("")

    def marshal_tags(self) -> str:
        return encode_strings(self.tags)

    def unmarshal_tags(self, data: str) -> None:
        self.tags = decode_strings(data)

    def is_archived(self) -> bool:
        return self.archived


@dataclass(slots=True)
class Album(_CreatedModified, Model):
    table_name: ClassVar[str] = "albums"

    id: int = 0
    title: str = ""
    artist: str = ""
    genre: str = omitempty("")
    release_year: int = omitempty(0)
    tracks: list[str] | None = omitempty()
    duration_seconds: int = omitempty(0)
    album_art_path: str = omitempty("")
    rating: int = omitempty(0)
    created: datetime = zero_time()
    modified: datetime = zero_time()

    def marshal_tracks(self) -> str:
        return encode_strings(self.tracks)

    def unmarshal_tracks(self, data: str) -> None:
        self.tracks = decode_strings(data)

    def has_rating(self) -> bool:
        return self.rating > 0

    def is_valid_rating(self) -> bool:
        return ALBUM_RATING_MIN <= self.rating <= ALBUM_RATING_MAX


@dataclass(slots=True)
class TimeEntry(_CreatedModified, Model):
    table_name: ClassVar[str] = "time_entries"

    id: int = 0
    task_id: int = 0
    start_time: datetime = zero_time()
    end_time: datetime | None = omitempty()
    duration_seconds: int = omitempty(0)
    description: str = omitempty("")
    created: datetime = zero_time()
    modified: datetime = zero_time()

    def is_active(self) -> bool:
        return self.end_time is None

    def stop(self, now: datetime | None = None) -> None:
        """Close the entry: set end time, whole-second duration and modified."""
        if now is None:
            now = datetime.now(timezone.utc)
        self.end_time = now
        self.duration_seconds = int((as_utc(now) - as_utc(self.start_time)).total_seconds())
        self.modified = now

    def duration(self, now: datetime | None = None) -> timedelta:
        """Stored duration once stopped; time elapsed since start while active."""
        if self.end_time is not None:
            return timedelta(seconds=self.duration_seconds)
        if now is None:
            now = datetime.now(timezone.utc)
        return as_utc(now) - as_utc(self.start_time)


@dataclass(slots=True)
class Article(_CreatedModified, Model):
    table_name: ClassVar[str] = "articles"

    id: int = 0
    url: str = ""
    title: str = ""
    author: str = omitempty("")
    date: str = omitempty("")
    markdown_path: str = ""
    html_path: str = ""
    created: datetime = zero_time()
    modified: datetime = zero_time()

    def is_valid_url(self) -> bool:
        """Absolute URL with a scheme, or an absolute path (request-URI rules)."""
        if not self.url:
            return False
        try:
            parts = urlsplit(self.url)
        except ValueError:
            return False
        if parts.scheme:
            return True
        return self.url.startswith("/")

    def has_author(self) -> bool:
        return self.author != ""

    def has_date(self) -> bool:
        return self.date != ""
