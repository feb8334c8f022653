"""Result models for local persistence, queue drains and sync status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional

from plansync.errors import LocalPersistenceError

OperationStatus = Literal["success", "failed", "skipped"]
DrainStatus = Literal["success", "partial", "failed", "empty"]


@dataclass(slots=True)
class StoreResult:
    """Outcome of a LocalStore write."""

    key: str
    error: Optional[LocalPersistenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class LoadResult:
    """Outcome of a LocalStore read. items is empty when error is set."""

    key: str
    items: list[dict[str, Any]] = field(default_factory=list)
    error: Optional[LocalPersistenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class OperationResult:
    """Result for a single SyncOperation within one drain pass."""

    op_id: str
    table: str
    kind: str
    status: OperationStatus

    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass(slots=True)
class DrainResult:
    """Aggregate result for PendingQueue.drain."""

    results: list[OperationResult] = field(default_factory=list)
    remaining: int = 0
    persist_error: Optional[LocalPersistenceError] = None

    @property
    def processed_ids(self) -> list[str]:
        return [r.op_id for r in self.results if r.status == "success"]

    @property
    def summary(self) -> dict[str, int]:
        summary: dict[str, int] = {"success": 0, "failed": 0, "skipped": 0}
        for r in self.results:
            summary[r.status] = summary.get(r.status, 0) + 1
        return summary

    @property
    def status(self) -> DrainStatus:
        s = self.summary
        if not self.results:
            return "empty"
        if s["failed"] == 0:
            return "success"
        if s["success"] == 0:
            return "failed"
        return "partial"


@dataclass(slots=True)
class SyncStatus:
    """Connectivity and queue snapshot for the UI layer."""

    reachable: bool
    pending_count: int
    last_sync_at: Optional[datetime] = None
    last_persistence_error: Optional[LocalPersistenceError] = None
