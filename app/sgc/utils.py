from __future__ import annotations

import threading
import time
from datetime import date, timedelta

_id_lock = threading.Lock()
_last_id = 0


def generate_id() -> str:
    """
    Millisecond-timestamp id, bumped past the previous one so two creates in
    the same millisecond still get distinct ids.
    """
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


def parse_date(s: str | date | None) -> date | None:
    """Parse a YYYY-MM-DD (or longer ISO) string; None when blank or invalid."""
    if s is None:
        return None
    if isinstance(s, date):
        return s
    s = s.strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


def today_iso(today: date | None = None) -> str:
    return (today or date.today()).isoformat()


def days_from(days: int, today: date | None = None) -> str:
    return ((today or date.today()) + timedelta(days=days)).isoformat()


def clean(value: object) -> str:
    return str(value or "").strip()


class RecordNotFound(LookupError):
    pass


def find_by_id(items, record_id: str):
    """Return the record with `record_id` from `items`; raise RecordNotFound otherwise."""
    for item in items:
        if item.id == record_id:
            return item
    raise RecordNotFound(record_id)


def coerce_enum(enum_cls, value, default=None):
    """Enum member for `value` (member or stable string); `default` when blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValueError(f"{enum_cls.__name__} value is required")
        return default
    if isinstance(value, str):
        value = value.strip()
    return enum_cls(value)


def invalid_enum_error(enum_cls, value, label: str) -> str | None:
    """Error message when a non-blank `value` is not one of `enum_cls`'s values."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        enum_cls(value.strip() if isinstance(value, str) else value)
    except ValueError:
        return f"Invalid {label}. Must be one of: {', '.join(m.value for m in enum_cls)}"
    return None
