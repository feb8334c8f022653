"""plansync public API."""

from __future__ import annotations

import logging

from plansync.config import Settings
from plansync.connectivity import ConnectivityProbe
from plansync.controller import RemoteClient
from plansync.coordinator import EntityOperations, NoteOperations, SyncCoordinator
from plansync.errors import (
    AuthError,
    BadRequestError,
    ConfigError,
    ConflictError,
    ConnectivityError,
    HttpErrorInfo,
    InvalidArgumentError,
    LocalPersistenceError,
    NotFoundError,
    PlanSyncError,
    RateLimitError,
    RemoteOperationError,
    ServerError,
    map_http_error,
)
from plansync.local import LocalStore
from plansync.models import (
    Achievement,
    DailyPlan,
    DrainResult,
    LoadResult,
    OperationResult,
    Record,
    SpecialNote,
    StoreResult,
    SyncStatus,
    Table,
)
from plansync.queue import OperationKind, PendingQueue, SyncOperation

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # High-level
    "SyncCoordinator",
    "EntityOperations",
    "NoteOperations",
    "Settings",
    # Components
    "ConnectivityProbe",
    "LocalStore",
    "PendingQueue",
    "RemoteClient",
    # Models
    "Record",
    "DailyPlan",
    "Achievement",
    "SpecialNote",
    "Table",
    "OperationKind",
    "SyncOperation",
    "StoreResult",
    "LoadResult",
    "OperationResult",
    "DrainResult",
    "SyncStatus",
    # Errors
    "PlanSyncError",
    "InvalidArgumentError",
    "ConfigError",
    "LocalPersistenceError",
    "ConnectivityError",
    "RemoteOperationError",
    "AuthError",
    "BadRequestError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "HttpErrorInfo",
    "map_http_error",
]
