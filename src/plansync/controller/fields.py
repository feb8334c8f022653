"""Request constants for the Supabase PostgREST API."""

from __future__ import annotations

SELECT_ALL: str = "*"
PROBE_SELECT: str = "id"

# Write requests don't need the row echoed back.
PREFER_MINIMAL: str = "return=minimal"


def eq_filter(value: str) -> str:
    return f"eq.{value}"


def order_desc(column: str) -> str:
    return f"{column}.desc"
