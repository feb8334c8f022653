"""Public local-storage exports for plansync."""

from __future__ import annotations

from .keys import LAST_SYNC_KEY, PENDING_SYNC_KEY
from .store import LocalStore

__all__ = ["LocalStore", "PENDING_SYNC_KEY", "LAST_SYNC_KEY"]
