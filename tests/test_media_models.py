# tests/test_media_models.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from noteleaf.errors import ValidationError
from noteleaf.models.media_models import Book, Movie, TVShow


def test_book_status_methods() -> None:
    book = Book(title="Dune", status="queued")
    assert book.is_queued()
    assert not book.is_reading()
    assert not book.is_finished()
    assert not book.is_completed()

    book.status = "reading"
    assert book.is_reading()
    assert not book.is_queued()

    book.status = "finished"
    assert book.is_finished()
    assert book.is_completed()

    assert book.valid_statuses() == ("queued", "reading", "finished", "removed")
    book.status = "watched"
    assert not book.is_valid_status()


def test_movie_status_methods() -> None:
    movie = Movie(title="Alien", status="queued")
    assert movie.is_queued()
    assert not movie.is_watched()
    assert not movie.is_completed()

    movie.status = "watched"
    assert movie.is_watched()
    assert movie.is_completed()
    assert movie.is_valid_status()

    assert movie.valid_statuses() == ("queued", "watched", "removed")
    movie.status = "watching"
    assert not movie.is_valid_status()


def test_tv_show_status_methods() -> None:
    show = TVShow(title="Lost", status="queued")
    assert show.is_queued()
    assert not show.is_watching()
    assert not show.is_watched()

    show.status = "watching"
    assert show.is_watching()
    assert not show.is_completed()

    show.status = "watched"
    assert show.is_watched()
    assert show.is_completed()

    assert show.valid_statuses() == ("queued", "watching", "watched", "removed")


def test_completion_time_fields() -> None:
    t = datetime(2024, 2, 3, tzinfo=timezone.utc)
    assert Book(finished=t).completion_time() == t
    assert Movie(watched=t).completion_time() == t
    assert TVShow(last_watched=t).completion_time() == t
    assert Book().completion_time() is None


def test_set_progress_bounds() -> None:
    book = Book(progress=40)

    for bad in (-1, 101, 1000):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            book.set_progress(bad)
        assert book.progress == 40

    book.set_progress(0)
    assert book.get_progress() == 0
    book.set_progress(100)
    assert book.get_progress() == 100
    assert book.progress_percent() == 100


def test_validation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Book().set_progress(-5)


def test_direct_progress_assignment_is_not_checked() -> None:
    book = Book()
    book.progress = 150
    assert book.get_progress() == 150


@pytest.mark.parametrize(
    ("kind", "table"),
    [(Book, "books"), (Movie, "movies"), (TVShow, "tv_shows")],
)
def test_added_backs_both_timestamps(kind, table: str) -> None:
    record = kind()
    assert record.table_name == table

    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    record.created_at = created
    assert record.added == created
    assert record.updated_at == created

    updated = created + timedelta(days=3)
    record.updated_at = updated
    assert record.created_at == updated
    assert record.added == updated

    record.set_id(7)
    assert record.id == 7
