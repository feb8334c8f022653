"""Storage keys for non-table values in the LocalStore."""

from __future__ import annotations

PENDING_SYNC_KEY: str = "pending_sync"
LAST_SYNC_KEY: str = "last_sync"
