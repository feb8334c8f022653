"""ConnectivityProbe: on-demand reachability check against the remote store."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from plansync.models import Table

logger = logging.getLogger(__name__)


class _Probeable(Protocol):
    def probe(self, table: Table = ..., *, timeout_sec: Optional[float] = ...) -> bool: ...


class ConnectivityProbe:
    """
    Answers "is the remote store reachable right now?".

    Each call performs a fresh single-row read; results are never cached,
    because connectivity can change between calls. Never raises.
    """

    def __init__(
        self,
        client: _Probeable,
        *,
        table: Table = Table.DAILY_PLANS,
        timeout_sec: Optional[float] = 5.0,
    ) -> None:
        self._client = client
        self._table = table
        self._timeout_sec = timeout_sec

    def is_reachable(self) -> bool:
        try:
            reachable = bool(self._client.probe(self._table, timeout_sec=self._timeout_sec))
        except Exception:
            logger.exception("Connectivity probe raised; treating as unreachable")
            return False

        if not reachable:
            logger.info("Remote store unreachable; working offline")
        return reachable
