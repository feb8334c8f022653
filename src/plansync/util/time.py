from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """Return current time as an ISO-8601 UTC string with milliseconds."""
    return to_iso8601(now_utc())


def parse_iso8601(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56.123456+00:00 (as returned by PostgREST)
    """
    if not isinstance(value, str) or not value:
        raise ValueError("ISO-8601 value must be a non-empty string")

    s = value.strip()
    # fromisoformat doesn't accept 'Z' before 3.11.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)
    dt = normalize_dt(dt)
    return dt.astimezone(timezone.utc)


def to_iso8601(dt: datetime) -> str:
    """Convert tz-aware datetime to ISO-8601 (UTC, milliseconds, 'Z' suffix)."""
    dt = normalize_dt(dt).astimezone(timezone.utc)
    s = dt.isoformat(timespec="milliseconds")
    return s.replace("+00:00", "Z")


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt
