# src/noteleaf/errors.py

from __future__ import annotations

"""
Error taxonomy.

Record predicates never raise; only mutators and decoders do.
All errors are ValueError subclasses so callers that already catch
ValueError keep working.
"""


class NoteleafError(Exception):
    """Base class for every error raised by noteleaf."""


class ValidationError(NoteleafError, ValueError):
    """A mutator was given a value outside its allowed range."""


class DecodeError(NoteleafError, ValueError):
    """A stored column or serialized record could not be decoded."""


class DependencyError(NoteleafError, ValueError):
    """A dependency edge was rejected (self-reference or cycle)."""


class TransitionError(NoteleafError, ValueError):
    """A status change is not in the allow-list for the record kind."""
