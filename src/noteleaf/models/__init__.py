"""
Record models.

Components:
- task_models.py: Task, status taxonomies, priority/urgency
- media_models.py: Book, Movie, TVShow
- aux_models.py: Note, Album, TimeEntry, Article
- codecs.py: collection columns and serialized record form
"""

from .aux_models import Album, Article, Note, TimeEntry
from .media_models import Book, Movie, TVShow
from .task_models import Task, TaskPriority, TaskStatus

__all__ = [
    "Album",
    "Article",
    "Book",
    "Movie",
    "Note",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TVShow",
    "TimeEntry",
]
