"""Supabase (PostgREST) client for the synced tables (internal use only)."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from plansync.config import Settings
from plansync.errors import (
    ConnectivityError,
    HttpErrorInfo,
    InvalidArgumentError,
    PlanSyncError,
    ServerError,
    map_http_error,
)
from plansync.models import Table

from .fields import PREFER_MINIMAL, PROBE_SELECT, SELECT_ALL, eq_filter, order_desc

logger = logging.getLogger(__name__)


class RemoteClient:
    """
    One logical remote call per method; single best-effort round trip.

    Notes:
        - No retry or backoff here; retry is the pending queue's job.
        - The public methods never raise across this boundary: failures are
          logged and turned into False/None. The *_or_raise variants expose
          the mapped plansync exceptions.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._rest_url = settings.rest_url
        self._timeout = settings.request_timeout_sec
        self._session = session or requests.Session()
        self._session.headers.update(_auth_headers(settings.supabase_anon_key))

    @classmethod
    def from_session(
        cls,
        session: Any,
        *,
        rest_url: str = "http://localhost/rest/v1",
        api_key: Optional[str] = None,
        timeout_sec: float = 10.0,
    ) -> "RemoteClient":
        """
        Create client from a pre-built session (useful for tests).

        Auth headers are installed only when api_key is given; otherwise the
        session is expected to carry them already.
        """
        obj = cls.__new__(cls)
        obj._rest_url = rest_url.rstrip("/")
        obj._timeout = timeout_sec
        obj._session = session
        if api_key is not None:
            session.headers.update(_auth_headers(api_key))
        return obj

    # ----------------------------
    # Public API (never raises)
    # ----------------------------
    def fetch_all(self, table: Table, order_by: str) -> Optional[list[dict[str, Any]]]:
        """All rows ordered by order_by descending, or None on failure."""
        try:
            return self.fetch_all_or_raise(table, order_by)
        except PlanSyncError as exc:
            logger.warning("Error fetching %s from remote: %s", table.value, exc)
            return None

    def insert(self, table: Table, row: dict[str, Any]) -> bool:
        return self._attempt(self.insert_or_raise, "insert", table, row)

    def update(self, table: Table, row: dict[str, Any]) -> bool:
        return self._attempt(self.update_or_raise, "update", table, row)

    def delete(self, table: Table, record_id: str) -> bool:
        return self._attempt(self.delete_or_raise, "delete", table, record_id)

    def probe(
        self,
        table: Table = Table.DAILY_PLANS,
        *,
        timeout_sec: Optional[float] = None,
    ) -> bool:
        """Minimal bounded read (one row, id only). False on any error."""
        try:
            self._request(
                "GET",
                table,
                params={"select": PROBE_SELECT, "limit": "1"},
                timeout=timeout_sec,
            )
        except PlanSyncError as exc:
            logger.debug("Connectivity probe failed: %s", exc)
            return False
        return True

    # ----------------------------
    # Raising API
    # ----------------------------
    def fetch_all_or_raise(self, table: Table, order_by: str) -> list[dict[str, Any]]:
        data = self._request(
            "GET",
            table,
            params={"select": SELECT_ALL, "order": order_desc(order_by)},
        )
        if not isinstance(data, list):
            raise ServerError(
                "Unexpected response shape (expected a list of rows)",
                details={"table": table.value},
            )
        return [row for row in data if isinstance(row, dict)]

    def insert_or_raise(self, table: Table, row: dict[str, Any]) -> None:
        self._request(
            "POST",
            table,
            json=[row],
            headers={"Prefer": PREFER_MINIMAL},
        )

    def update_or_raise(self, table: Table, row: dict[str, Any]) -> None:
        record_id = _require_id(row.get("id"))
        self._request(
            "PATCH",
            table,
            params={"id": eq_filter(record_id)},
            json=row,
            headers={"Prefer": PREFER_MINIMAL},
        )

    def delete_or_raise(self, table: Table, record_id: str) -> None:
        self._request(
            "DELETE",
            table,
            params={"id": eq_filter(_require_id(record_id))},
            headers={"Prefer": PREFER_MINIMAL},
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _attempt(self, func, kind: str, table: Table, arg: Any) -> bool:
        try:
            func(table, arg)
        except PlanSyncError as exc:
            logger.warning("Remote %s on %s failed: %s", kind, table.value, exc)
            return False
        return True

    def _request(
        self,
        method: str,
        table: Table,
        *,
        params: Optional[dict[str, str]] = None,
        json: Any = None,
        headers: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        url = f"{self._rest_url}/{table.value}"
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise ConnectivityError(
                "Remote store unreachable",
                details={"method": method, "table": table.value},
                cause=exc,
            ) from exc
        except requests.RequestException as exc:
            raise ConnectivityError(
                "Request failed",
                details={"method": method, "table": table.value},
                cause=exc,
            ) from exc

        if resp.status_code >= 400:
            raise map_http_error(_response_to_info(resp))

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return None


def _auth_headers(api_key: str) -> dict[str, str]:
    return {
        "apikey": api_key,
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def _require_id(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError("Row id must be a non-empty string")
    return value


def _response_to_info(resp: Any) -> HttpErrorInfo:
    """Extract PostgREST's {code, message, details, hint} error body."""
    code = None
    message = None
    details: dict[str, Any] = {}

    try:
        payload = resp.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        if isinstance(payload.get("code"), str):
            code = payload["code"]
        if isinstance(payload.get("message"), str):
            message = payload["message"]
        for key in ("details", "hint"):
            if payload.get(key):
                details[key] = payload[key]

    status_code = resp.status_code if isinstance(resp.status_code, int) else 0
    return HttpErrorInfo(
        status_code=status_code,
        code=code,
        message=message,
        details=details or None,
    )
