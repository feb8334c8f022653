"""Exception hierarchy and HTTP error mapping for plansync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class PlanSyncError(Exception):
    """
    Base exception for plansync.

    Attributes:
        details: Optional structured information (e.g., HTTP status, table).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidArgumentError(PlanSyncError):
    """Raised when caller input is malformed (unknown field, bad value, missing id)."""


class ConfigError(PlanSyncError):
    """Raised when settings are missing or invalid."""


class LocalPersistenceError(PlanSyncError):
    """Serialization or device-storage fault in the local cache."""


class ConnectivityError(PlanSyncError):
    """Remote store is unreachable (connection refused, DNS, timeout)."""


class RemoteOperationError(PlanSyncError):
    """A fetch/insert/update/delete was rejected by the remote store."""


class AuthError(RemoteOperationError):
    """Raised when the API key is rejected (HTTP 401/403)."""


class BadRequestError(RemoteOperationError):
    """Raised when the row or filter is rejected (HTTP 400/422)."""


class NotFoundError(RemoteOperationError):
    """Raised when a table or resource does not exist (HTTP 404)."""


class ConflictError(RemoteOperationError):
    """Raised on unique-key or precondition conflicts (HTTP 409/412)."""


class RateLimitError(RemoteOperationError):
    """Raised when rate-limited (HTTP 429)."""


class ServerError(RemoteOperationError):
    """Raised for 5xx and unclassified remote errors."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to plansync exceptions."""

    status_code: int
    code: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RemoteOperationError:
    """
    Map an HTTP error to a plansync exception.

    Policy:
        - 400/422 -> BadRequestError
        - 401/403 -> AuthError
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ServerError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "code": info.code,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code in (400, 422):
        return BadRequestError(message, details=details, cause=cause)
    if info.status_code in (401, 403):
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ServerError(message, details=details, cause=cause)
