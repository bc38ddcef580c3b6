# src/noteleaf/models/codecs.py

"""
Collection codecs and the serialized record form.

Collection columns (tags, annotations, tracks):
- an empty or unset list is stored as "" (never "[]")
- "" decodes to None (unset), not to an empty list
- anything else must be a compact JSON array of strings

Serialized form:
- keys are the dataclass field names
- fields declared with omitempty() are dropped when None/""/0/empty
- datetimes are ISO-8601 strings
- on load, a value of the wrong JSON type is a DecodeError; ranges are not
  checked (Book.progress is bounded by set_progress() only)
"""

from __future__ import annotations

import dataclasses
import json
import logging
import types
import typing
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from ..errors import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Go-style zero timestamp: the value a freshly constructed record carries
# until storage writes the real one back.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_OMITEMPTY = "omitempty"


def omitempty(default: Any = None, *, factory: Any = None) -> Any:
    """Dataclass field that is left out of the serialized form when empty."""
    if factory is not None:
        return dataclasses.field(default_factory=factory, metadata={_OMITEMPTY: True})
    return dataclasses.field(default=default, metadata={_OMITEMPTY: True})


def zero_time() -> datetime:
    return ZERO_TIME


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC, so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---- collection columns ----

def encode_strings(items: Sequence[str] | None) -> str:
    """Encode a list of strings for a single text column."""
    if not items:
        return ""
    return json.dumps(list(items), ensure_ascii=False, separators=(",", ":"))


def decode_strings(data: str | None) -> list[str] | None:
    """
    Decode a text column produced by encode_strings().

    Raises DecodeError on malformed JSON or a document that is not an array
    of strings.
    """
    if not data:
        return None
    try:
        value = json.loads(data)
    except json.JSONDecodeError as e:
        logger.debug("Collection column is not valid JSON: %r", data)
        raise DecodeError(f"invalid collection column: {e}") from e

    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError(f"collection column must be a JSON array of strings, got {data!r}")
    return value


# ---- serialized form ----

def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (str, int, float, list, tuple, dict)):
        return not value
    return False


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, tuple):
        return list(value)
    return value


def to_dict(record: Any) -> dict[str, Any]:
    """Serialize a record dataclass to a JSON-ready dict."""
    out: dict[str, Any] = {}
    for f in dataclasses.fields(record):
        value = getattr(record, f.name)
        if f.metadata.get(_OMITEMPTY) and _is_empty(value):
            continue
        if isinstance(value, list):
            value = [_encode_value(v) for v in value]
        out[f.name] = _encode_value(value)
    return out


def _is_datetime_hint(hint: Any) -> bool:
    if hint is datetime:
        return True
    return datetime in typing.get_args(hint)


def _parse_datetime(name: str, raw: Any) -> datetime | None:
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError as e:
        raise DecodeError(f"field {name!r}: invalid timestamp {raw!r}") from e


def _allowed_types(hint: Any) -> tuple[Any, ...]:
    hint = getattr(hint, "__supertype__", hint)  # NewType
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        out: tuple[Any, ...] = ()
        for arg in typing.get_args(hint):
            out += _allowed_types(arg)
        return out
    return (hint,)


def _matches(expected: Any, raw: Any) -> bool:
    if expected is type(None):
        return raw is None
    if typing.get_origin(expected) is list:
        (item,) = typing.get_args(expected) or (Any,)
        return isinstance(raw, list) and (item is Any or all(isinstance(v, item) for v in raw))
    # bool is an int subclass; JSON true/false must not pass as a number.
    if expected is float:
        return isinstance(raw, (int, float)) and not isinstance(raw, bool)
    if expected is int:
        return isinstance(raw, int) and not isinstance(raw, bool)
    if expected in (str, bool):
        return isinstance(raw, expected)
    return True


def _check_value(name: str, hint: Any, raw: Any) -> None:
    if hint is None:
        return
    if not any(_matches(t, raw) for t in _allowed_types(hint)):
        raise DecodeError(f"field {name!r}: unexpected value {raw!r}")


def from_dict(kind: type[T], data: dict[str, Any]) -> T:
    """Build a record of the given kind from a serialized dict; unknown keys are ignored."""
    if not isinstance(data, dict):
        raise DecodeError(f"{kind.__name__} must be a JSON object, got {type(data).__name__}")

    hints = typing.get_type_hints(kind)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(kind):  # type: ignore[arg-type]
        if not f.init or f.name not in data:
            continue
        raw = data[f.name]
        hint = hints.get(f.name)
        if _is_datetime_hint(hint):
            raw = _parse_datetime(f.name, raw)
        else:
            _check_value(f.name, hint, raw)
            if isinstance(raw, list):
                raw = list(raw)
        kwargs[f.name] = raw
    return kind(**kwargs)


def dumps(record: Any) -> str:
    return json.dumps(to_dict(record), ensure_ascii=False)


def loads(kind: type[T], text: str) -> T:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid {kind.__name__} JSON: {e}") from e
    return from_dict(kind, data)
