"""PendingQueue: durable FIFO log of mutations awaiting remote confirmation."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from plansync.errors import InvalidArgumentError, LocalPersistenceError
from plansync.local import PENDING_SYNC_KEY, LocalStore
from plansync.models import DrainResult, OperationResult, Table
from plansync.util.ids import new_op_id
from plansync.util.time import now_iso

from .operation import OperationKind, SyncOperation

logger = logging.getLogger(__name__)

ApplyFn = Callable[[SyncOperation], bool]


class PendingQueue:
    """
    Ordered, durable log of SyncOperations.

    Every read-modify-write of the persisted log (enqueue, drain, clear) runs
    under one re-entrant lock, so two callers draining at the same time never
    apply the same operation twice. Insertion order is the only ordering.
    """

    def __init__(self, store: LocalStore, *, key: str = PENDING_SYNC_KEY) -> None:
        self._store = store
        self._key = key
        self._lock = threading.RLock()
        self._last_error: Optional[LocalPersistenceError] = None

    @property
    def last_error(self) -> Optional[LocalPersistenceError]:
        """Most recent persistence fault seen by the queue (None after a clean write)."""
        return self._last_error

    # ----------------------------
    # Read APIs
    # ----------------------------
    def list(self) -> list[SyncOperation]:
        with self._lock:
            ops, _ = self._load_operations()
            return ops

    def __len__(self) -> int:
        return len(self.list())

    # ----------------------------
    # Mutation APIs
    # ----------------------------
    def enqueue(
        self,
        table: Table,
        kind: OperationKind,
        payload: dict[str, Any],
    ) -> SyncOperation:
        """Assign id/timestamp and append to the end of the log."""
        op = SyncOperation(
            id=new_op_id(),
            table=table,
            kind=kind,
            payload=dict(payload),
            enqueued_at=now_iso(),
        )
        try:
            op.validate_required_fields()
        except ValueError as exc:
            raise InvalidArgumentError(
                "Invalid operation: missing required fields",
                details={"table": str(table), "kind": str(kind)},
                cause=exc,
            ) from exc

        with self._lock:
            raw = self._store.load(self._key)
            raw.append(op.to_dict())
            self._save(raw)

        logger.debug(
            "Queued %s on %s (op_id=%s, record_id=%s)",
            op.kind.value,
            op.table.value,
            op.id,
            op.record_id,
        )
        return op

    def drain(self, apply: ApplyFn) -> DrainResult:
        """
        One pass over the log in FIFO order.

        apply is called once per operation; True marks it processed. After the
        pass the log is rewritten without the processed operations, keeping
        anything enqueued while the pass ran. A failure does not stop the pass.
        """
        with self._lock:
            ops, dropped = self._load_operations()
            results: list[OperationResult] = []
            processed: set[str] = set()
            seen: set[str] = set()

            for op in ops:
                if op.id in seen:
                    results.append(_result(op, "skipped"))
                    continue
                seen.add(op.id)

                try:
                    ok = bool(apply(op))
                except Exception as exc:
                    logger.exception("Error processing sync operation %s", op.id)
                    results.append(
                        _result(
                            op,
                            "failed",
                            error_type=exc.__class__.__name__,
                            error_message=str(exc),
                        )
                    )
                    continue

                if ok:
                    processed.add(op.id)
                    results.append(_result(op, "success"))
                else:
                    results.append(_result(op, "failed"))

            remaining = len(ops)
            persist_error = None
            if processed or dropped:
                # Re-read so operations appended during the pass are kept.
                current, _ = self._load_operations()
                kept = [op for op in current if op.id not in processed]
                remaining = len(kept)
                persist_error = self._save([op.to_dict() for op in kept])

        result = DrainResult(results=results, remaining=remaining, persist_error=persist_error)
        if results:
            logger.info(
                "Drained pending queue: %s (remaining=%d)", result.summary, remaining
            )
        return result

    def clear(self) -> None:
        with self._lock:
            self._save([])

    # ----------------------------
    # Internals
    # ----------------------------
    def _load_operations(self) -> tuple[list[SyncOperation], int]:
        loaded = self._store.try_load(self._key)
        if loaded.error is not None:
            self._last_error = loaded.error

        ops: list[SyncOperation] = []
        dropped = 0
        for entry in loaded.items:
            try:
                ops.append(SyncOperation.from_dict(entry))
            except ValueError as exc:
                dropped += 1
                logger.warning("Dropping malformed queued operation: %s", exc)
        return ops, dropped

    def _save(self, raw: list[dict[str, Any]]) -> Optional[LocalPersistenceError]:
        saved = self._store.save(self._key, raw)
        self._last_error = saved.error
        return saved.error


def _result(
    op: SyncOperation,
    status: str,
    *,
    error_type: Optional[str] = None,
    error_message: Optional[str] = None,
) -> OperationResult:
    return OperationResult(
        op_id=op.id,
        table=op.table.value,
        kind=op.kind.value,
        status=status,  # type: ignore[arg-type]
        error_type=error_type,
        error_message=error_message,
    )
