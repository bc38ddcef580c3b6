"""
noteleaf: personal productivity records.

Components:
- core/ports.py: persistence contract + capability interfaces (Stateful, Queueable, Completable, Progressable)
- models/: record kinds (Task, Book, Movie, TVShow, auxiliary records) and the collection/record codecs
- tasks/: dependency graph, status state machine, generic ranking queries, task helpers
- config.py / logging_setup.py: settings and logging
"""

__version__ = "0.1.0"
