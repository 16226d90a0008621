from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from ..core.exceptions import ValidationError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_utc_instant(value: Any, field_name: str = "timestamp") -> datetime:
    """Normalize the timestamp shapes we receive into an aware UTC datetime.

    Accepted:
    - ``datetime`` (what mysql-connector returns; naive values are taken as UTC)
    - ISO-8601 string, with or without offset (``Z`` suffix allowed)
    - epoch milliseconds as int/float
    - serialized store timestamp ``{"_seconds": .., "_nanoseconds": ..}``
      (the underscore-free ``seconds``/``nanoseconds`` keys work too)
    """

    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError(f"{field_name} is empty")
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            raise ValidationError(f"{field_name} is not an ISO-8601 timestamp: {value!r}")

    # bool is an int subclass; a flag is never a timestamp.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _EPOCH + timedelta(milliseconds=value)

    if isinstance(value, Mapping):
        seconds = value.get("_seconds", value.get("seconds"))
        nanos = value.get("_nanoseconds", value.get("nanoseconds", 0))
        if seconds is None:
            raise ValidationError(f"{field_name} mapping has no seconds field")
        try:
            return _EPOCH + timedelta(seconds=int(seconds), microseconds=int(nanos or 0) // 1000)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} mapping is malformed: {value!r}")

    raise ValidationError(f"Unsupported {field_name} type: {type(value).__name__}")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)
