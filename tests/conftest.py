# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from noteleaf.models.media_models import Book, Movie, TVShow
from noteleaf.models.task_models import Task

from .fakes import FakeModelRepo

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now() -> datetime:
    """Fixed clock so overdue/urgency checks are deterministic."""
    return NOW


@pytest.fixture()
def repo() -> FakeModelRepo:
    return FakeModelRepo(clock=lambda: NOW)


@pytest.fixture()
def media() -> list:
    """A mixed shelf: one record per kind and status of interest."""
    return [
        Book(title="Dune", status="queued"),
        Book(title="Emma", status="finished", finished=datetime(2024, 3, 1, tzinfo=timezone.utc)),
        Movie(title="Alien", status="watched", watched=datetime(2024, 5, 1, tzinfo=timezone.utc)),
        Movie(title="Heat", status="queued"),
        TVShow(title="Lost", status="watching"),
        TVShow(title="Fargo", status="watched", last_watched=datetime(2024, 4, 1, tzinfo=timezone.utc)),
        Task(uuid="t-1", description="write report", status="todo"),
    ]
