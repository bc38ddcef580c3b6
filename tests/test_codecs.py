# tests/test_codecs.py

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from noteleaf.errors import DecodeError
from noteleaf.models.aux_models import Album, Note, TimeEntry
from noteleaf.models.codecs import (
    ZERO_TIME,
    as_utc,
    decode_strings,
    dumps,
    encode_strings,
    from_dict,
    loads,
    to_dict,
)
from noteleaf.models.media_models import Book, Movie, TVShow
from noteleaf.models.task_models import Task

T0 = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)


def test_encode_empty_is_empty_string() -> None:
    assert encode_strings([]) == ""
    assert encode_strings(None) == ""


def test_encode_is_compact_json_array() -> None:
    assert encode_strings(["work", "urgent", "project-x"]) == '["work","urgent","project-x"]'
    assert encode_strings(("a",)) == '["a"]'


def test_decode_empty_is_unset() -> None:
    assert decode_strings("") is None
    assert decode_strings(None) is None
    assert decode_strings("null") is None


def test_round_trip_keeps_order() -> None:
    items = ["zeta", "alpha", "mid", "alpha"]
    assert decode_strings(encode_strings(items)) == items
    # Emptied and never-set collapse to the same thing.
    assert decode_strings(encode_strings([])) is None


def test_non_ascii_is_kept_readable() -> None:
    encoded = encode_strings(["café"])
    assert encoded == '["café"]'
    assert decode_strings(encoded) == ["café"]


@pytest.mark.parametrize("data", ['["a",', "not json", "{", '["a"]]'])
def test_decode_malformed_raises(data: str) -> None:
    with pytest.raises(DecodeError):
        decode_strings(data)


@pytest.mark.parametrize("data", ['{"a": 1}', "[1, 2]", '"text"', '["a", null]'])
def test_decode_wrong_shape_raises(data: str) -> None:
    with pytest.raises(DecodeError):
        decode_strings(data)


def test_decode_error_chains_json_error() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_strings("[")
    assert isinstance(exc.value.__cause__, json.JSONDecodeError)


def test_task_columns_and_failed_decode_leave_field_alone() -> None:
    task = Task(tags=["work"], annotations=["first note"])
    assert task.marshal_tags() == '["work"]'
    assert task.marshal_annotations() == '["first note"]'

    with pytest.raises(DecodeError):
        task.unmarshal_tags("[oops")
    assert task.tags == ["work"]

    with pytest.raises(DecodeError):
        task.unmarshal_annotations("{")
    assert task.annotations == ["first note"]

    task.unmarshal_tags("")
    assert task.tags is None
    task.unmarshal_annotations('["a","b"]')
    assert task.annotations == ["a", "b"]


def test_task_serialized_form_omits_empty_fields() -> None:
    task = Task(id=1, uuid="u-1", description="bare", status="todo", entry=T0, modified=T0)
    data = to_dict(task)
    assert set(data) == {"id", "uuid", "description", "status", "entry", "modified"}
    assert data["entry"] == T0.isoformat()


def test_task_serialized_round_trip() -> None:
    task = Task(
        id=9,
        uuid="u-9",
        description="ship release",
        status="in-progress",
        priority="High",
        project="noteleaf",
        context="work",
        tags=["release", "q2"],
        due=datetime(2024, 6, 1, tzinfo=timezone.utc),
        entry=T0,
        modified=T0,
        start=T0,
        annotations=["kicked off"],
        recur="FREQ=WEEKLY;BYDAY=MO",
        until=datetime(2024, 12, 31, tzinfo=timezone.utc),
        parent_uuid="u-template",
        depends_on=["u-1", "u-2"],
    )
    restored = loads(Task, dumps(task))
    assert restored == task
    assert to_dict(restored) == to_dict(task)


def test_media_serialized_forms() -> None:
    book = Book(id=1, title="Dune", status="reading", progress=0, added=T0)
    data = to_dict(book)
    # progress is always emitted, even at zero
    assert data == {"id": 1, "title": "Dune", "status": "reading", "progress": 0, "added": T0.isoformat()}
    assert from_dict(Book, data) == book

    movie = Movie(id=2, title="Alien", year=1979, status="watched", rating=4.5, added=T0, watched=T0)
    assert loads(Movie, dumps(movie)) == movie

    show = TVShow(id=3, title="Lost", season=2, episode=5, status="watching", notes="hatch", added=T0)
    data = to_dict(show)
    assert "last_watched" not in data
    assert "rating" not in data
    assert from_dict(TVShow, data) == show


def test_aux_serialized_forms() -> None:
    note = Note(id=1, title="n", content="body", created=T0, modified=T0)
    data = to_dict(note)
    assert data["archived"] is False
    assert "tags" not in data
    assert from_dict(Note, data) == note

    album = Album(id=2, title="Blue", artist="Joni", tracks=["a", "b"], created=T0, modified=T0)
    assert loads(Album, dumps(album)) == album

    entry = TimeEntry(id=3, task_id=9, start_time=T0, created=T0, modified=T0)
    data = to_dict(entry)
    assert "end_time" not in data
    assert from_dict(TimeEntry, data) == entry


def test_zero_values_serialize_and_restore() -> None:
    task = Task()
    data = to_dict(task)
    assert data["entry"] == ZERO_TIME.isoformat()
    assert loads(Task, dumps(task)) == task


def test_from_dict_ignores_unknown_keys() -> None:
    book = from_dict(Book, {"title": "Dune", "status": "queued", "isbn": "123"})
    assert book.title == "Dune"
    assert book.is_queued()


def test_loads_errors() -> None:
    with pytest.raises(DecodeError):
        loads(Task, "{not json")
    with pytest.raises(DecodeError):
        loads(Task, "[1, 2]")
    with pytest.raises(DecodeError):
        loads(Task, '{"due": "yesterday"}')


@pytest.mark.parametrize(
    ("kind", "data"),
    [
        (Book, {"progress": "abc"}),
        (Book, {"progress": True}),
        (Book, {"title": 42}),
        (Movie, {"rating": "five"}),
        (Note, {"archived": "yes"}),
        (Task, {"tags": "work"}),
        (Task, {"depends_on": ["u-1", 2]}),
        (Task, {"recur": 7}),
        (Task, {"description": None}),
    ],
)
def test_from_dict_rejects_wrong_types(kind, data: dict) -> None:
    with pytest.raises(DecodeError):
        from_dict(kind, data)


def test_from_dict_accepts_json_numbers_and_nulls() -> None:
    movie = from_dict(Movie, {"title": "Alien", "rating": 4})
    assert movie.rating == 4
    task = from_dict(Task, {"tags": None, "parent_uuid": None, "recur": "FREQ=DAILY"})
    assert task.tags is None
    assert task.is_recurring()


def test_from_dict_does_not_range_check_progress() -> None:
    # Only set_progress() enforces 0..100.
    assert from_dict(Book, {"progress": 150}).progress == 150


def test_as_utc() -> None:
    naive = datetime(2024, 5, 1, 8, 30)
    assert as_utc(naive) == T0
    assert as_utc(naive).tzinfo is timezone.utc
    assert as_utc(T0) is T0
