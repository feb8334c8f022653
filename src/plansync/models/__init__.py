"""Public model exports for plansync."""

from __future__ import annotations

from .records import (
    ACHIEVEMENT_STATUSES,
    Achievement,
    DailyPlan,
    Record,
    SpecialNote,
    SyncState,
)
from .results import (
    DrainResult,
    DrainStatus,
    LoadResult,
    OperationResult,
    OperationStatus,
    StoreResult,
    SyncStatus,
)
from .tables import TABLE_SPECS, Table, TableSpec

__all__ = [
    "Record",
    "DailyPlan",
    "Achievement",
    "SpecialNote",
    "SyncState",
    "ACHIEVEMENT_STATUSES",
    "Table",
    "TableSpec",
    "TABLE_SPECS",
    "StoreResult",
    "LoadResult",
    "OperationStatus",
    "OperationResult",
    "DrainStatus",
    "DrainResult",
    "SyncStatus",
]
