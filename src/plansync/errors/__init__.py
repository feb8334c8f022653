"""Public error exports for plansync."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
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
