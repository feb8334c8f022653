"""SyncCoordinator: offline-first operations and manual sync for every screen."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Generic, Optional, Protocol, TypeVar

from plansync.config import Settings
from plansync.connectivity import ConnectivityProbe
from plansync.controller import RemoteClient
from plansync.errors import InvalidArgumentError, LocalPersistenceError
from plansync.local import LAST_SYNC_KEY, LocalStore
from plansync.models import (
    TABLE_SPECS,
    Achievement,
    DailyPlan,
    DrainResult,
    Record,
    SpecialNote,
    SyncStatus,
    Table,
    TableSpec,
)
from plansync.queue import OperationKind, PendingQueue, SyncOperation
from plansync.util.ids import new_record_id
from plansync.util.time import now_iso, parse_iso8601

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

_RESERVED_FIELDS: tuple[str, ...] = ("id", "created_at", "updated_at", "sync_state")


class Remote(Protocol):
    def fetch_all(self, table: Table, order_by: str) -> Optional[list[dict[str, Any]]]: ...

    def insert(self, table: Table, row: dict[str, Any]) -> bool: ...

    def update(self, table: Table, row: dict[str, Any]) -> bool: ...

    def delete(self, table: Table, record_id: str) -> bool: ...


class SyncCoordinator:
    """
    Facade over LocalStore, PendingQueue, RemoteClient and ConnectivityProbe.

    Policy:
        - Write-through: every mutation lands in the LocalStore before any
          remote attempt, so it is durable regardless of connectivity.
        - A failed or skipped remote attempt becomes a queued SyncOperation.
        - Remote failures and local persistence faults never raise to the
          caller; only malformed input does (InvalidArgumentError).
        - get_all overwrites the local cache with the remote set, then drains
          the queue, so pending local intents are applied last.
    """

    def __init__(
        self,
        store: LocalStore,
        queue: PendingQueue,
        remote: Remote,
        probe: ConnectivityProbe,
    ) -> None:
        self._store = store
        self._queue = queue
        self._remote = remote
        self._probe = probe
        self._last_persistence_error: Optional[LocalPersistenceError] = None

        self.plans: EntityOperations[DailyPlan] = EntityOperations(
            self, TABLE_SPECS[Table.DAILY_PLANS]
        )
        self.achievements: EntityOperations[Achievement] = EntityOperations(
            self, TABLE_SPECS[Table.ACHIEVEMENTS]
        )
        self.notes: NoteOperations = NoteOperations(self, TABLE_SPECS[Table.SPECIAL_NOTES])

    @classmethod
    def from_settings(cls, settings: Settings, *, session: Any = None) -> "SyncCoordinator":
        """Wire the default stack (JSON files + Supabase over HTTP)."""
        store = LocalStore(settings.resolved_data_dir)
        remote = RemoteClient(settings, session=session)
        probe = ConnectivityProbe(remote, timeout_sec=settings.probe_timeout_sec)
        return cls(store, PendingQueue(store), remote, probe)

    # ----------------------------
    # Connectivity / sync
    # ----------------------------
    def is_reachable(self) -> bool:
        return self._probe.is_reachable()

    def sync_now(self) -> bool:
        """Drain the pending queue for all tables. False when unreachable."""
        if not self.is_reachable():
            return False
        self._drain()
        return True

    def pending_operations(self) -> list[SyncOperation]:
        return self._queue.list()

    @property
    def last_persistence_error(self) -> Optional[LocalPersistenceError]:
        return self._last_persistence_error or self._queue.last_error

    def last_sync_at(self) -> Optional[datetime]:
        value = self._store.load_value(LAST_SYNC_KEY)
        if not isinstance(value, str):
            return None
        try:
            return parse_iso8601(value)
        except ValueError:
            logger.warning("Ignoring malformed last-sync timestamp: %r", value)
            return None

    def status(self) -> SyncStatus:
        return SyncStatus(
            reachable=self.is_reachable(),
            pending_count=len(self._queue),
            last_sync_at=self.last_sync_at(),
            last_persistence_error=self.last_persistence_error,
        )

    # ----------------------------
    # Internals shared with EntityOperations
    # ----------------------------
    def _drain(self) -> DrainResult:
        result = self._queue.drain(self._apply_queued)
        if result.processed_ids:
            saved = self._store.save_value(LAST_SYNC_KEY, now_iso())
            self._note_persistence(saved.error)
        return result

    def _apply_queued(self, op: SyncOperation) -> bool:
        ok = self._send(op.table, op.kind, op.payload)
        if ok and op.kind is not OperationKind.DELETE and op.record_id:
            self._mark_reconciled(TABLE_SPECS[op.table], op.payload)
        return ok

    def _send(self, table: Table, kind: OperationKind, payload: dict[str, Any]) -> bool:
        if kind is OperationKind.INSERT:
            return self._remote.insert(table, payload)
        if kind is OperationKind.UPDATE:
            return self._remote.update(table, payload)
        if kind is OperationKind.DELETE:
            return self._remote.delete(table, payload["id"])
        raise InvalidArgumentError("Unsupported operation kind", details={"kind": kind})

    def _push(self, spec: TableSpec, kind: OperationKind, payload: dict[str, Any]) -> bool:
        """One immediate remote attempt; queue the mutation when it can't land."""
        if self.is_reachable() and self._send(spec.table, kind, payload):
            return True

        self._queue.enqueue(spec.table, kind, payload)
        logger.info(
            "%s on %s deferred until next sync (record_id=%s)",
            kind.value,
            spec.table.value,
            payload.get("id"),
        )
        return False

    def _load_records(self, spec: TableSpec) -> list[Record]:
        loaded = self._store.try_load(spec.storage_key)
        self._note_persistence(loaded.error)

        records: list[Record] = []
        for item in loaded.items:
            if not isinstance(item, dict):
                logger.warning("Skipping malformed cached %s entry", spec.table.value)
                continue
            records.append(spec.record_cls.from_dict(item))
        return records

    def _save_records(self, spec: TableSpec, records: list[Record]) -> None:
        saved = self._store.save(spec.storage_key, [r.to_dict() for r in records])
        self._note_persistence(saved.error)

    def _mark_reconciled(self, spec: TableSpec, confirmed_row: dict[str, Any]) -> None:
        """Tag the cached record reconciled if it is still the confirmed version."""
        records = self._load_records(spec)
        for i, record in enumerate(records):
            if record.id != confirmed_row.get("id"):
                continue
            # A newer local edit is still waiting on its own operation.
            if record.to_row() != confirmed_row:
                return
            if record.sync_state != "reconciled":
                records[i] = record.replace(sync_state="reconciled")
                self._save_records(spec, records)
            return

    def _note_persistence(self, error: Optional[LocalPersistenceError]) -> None:
        if error is not None:
            self._last_persistence_error = error


class EntityOperations(Generic[R]):
    """get_all / create / update for one entity type."""

    def __init__(self, coordinator: SyncCoordinator, spec: TableSpec) -> None:
        self._coordinator = coordinator
        self._spec = spec

    @property
    def table(self) -> Table:
        return self._spec.table

    def get_all(self) -> list[R]:
        """
        Remote rows (newest first) when reachable, else the local cache.

        A successful fetch overwrites the local cache wholesale and then
        drains the pending queue.
        """
        c = self._coordinator
        if c.is_reachable():
            rows = c._remote.fetch_all(self._spec.table, self._spec.order_by)
            if rows is not None:
                records = [
                    self._spec.record_cls.from_dict(row).replace(sync_state="reconciled")
                    for row in rows
                ]
                c._save_records(self._spec, records)
                c._drain()
                return records  # type: ignore[return-value]

        return c._load_records(self._spec)  # type: ignore[return-value]

    def create(self, fields: Mapping[str, Any]) -> R:
        """Create locally (prepended), then insert remotely or queue."""
        if not isinstance(fields, Mapping):
            raise InvalidArgumentError("fields must be a mapping")

        now = now_iso()
        data = {k: v for k, v in fields.items() if k not in _RESERVED_FIELDS}
        data.update(id=new_record_id(), created_at=now, updated_at=now, sync_state="pending")
        record = self._spec.record_cls.from_dict(data, strict=True)

        c = self._coordinator
        records = c._load_records(self._spec)
        records.insert(0, record)
        c._save_records(self._spec, records)

        if c._push(self._spec, OperationKind.INSERT, record.to_row()):
            c._mark_reconciled(self._spec, record.to_row())
            record = record.replace(sync_state="reconciled")
        return record  # type: ignore[return-value]

    def update(self, record: R | Mapping[str, Any]) -> None:
        """
        Refresh updated_at, replace the cached entry by id, push or queue.

        A mapping is applied as a patch over the cached record with the same
        id. Without a cached record it must carry every entity field.
        """
        c = self._coordinator
        records = c._load_records(self._spec)
        current = self._coerce(record, records)
        updated = current.replace(updated_at=now_iso(), sync_state="pending")

        for i, existing in enumerate(records):
            if existing.id == updated.id:
                records[i] = updated
                c._save_records(self._spec, records)
                break

        if c._push(self._spec, OperationKind.UPDATE, updated.to_row()):
            c._mark_reconciled(self._spec, updated.to_row())

    def _coerce(self, record: R | Mapping[str, Any], cached: list[Record]) -> Record:
        cls = self._spec.record_cls
        if isinstance(record, Mapping):
            obj = cls.from_dict(self._merge_patch(record, cached), strict=True)
        elif isinstance(record, cls):
            obj = record
            try:
                obj.validate()
            except (TypeError, ValueError) as exc:
                raise InvalidArgumentError(f"Invalid {cls.__name__}: {exc}", cause=exc) from exc
        else:
            raise InvalidArgumentError(
                f"Expected {cls.__name__} or mapping",
                details={"type": type(record).__name__},
            )

        if not obj.id:
            raise InvalidArgumentError(f"{cls.__name__}.id is required for update")
        return obj

    def _merge_patch(self, patch: Mapping[str, Any], cached: list[Record]) -> dict[str, Any]:
        cls = self._spec.record_cls
        record_id = patch.get("id")
        for existing in cached:
            if record_id and existing.id == record_id:
                merged = existing.to_dict()
                merged.update(patch)
                return merged

        missing = [
            name
            for name in cls.field_names()
            if name not in _RESERVED_FIELDS and name not in patch
        ]
        if missing:
            raise InvalidArgumentError(
                f"Incomplete {cls.__name__} for uncached id",
                details={"id": record_id, "missing": missing},
            )
        return dict(patch)


class NoteOperations(EntityOperations[SpecialNote]):
    """Notes additionally support delete."""

    def delete(self, record_id: str) -> None:
        """Remove from the local cache, then delete remotely or queue."""
        if not isinstance(record_id, str) or not record_id.strip():
            raise InvalidArgumentError("record_id must be a non-empty string")

        c = self._coordinator
        records = c._load_records(self._spec)
        c._save_records(self._spec, [r for r in records if r.id != record_id])

        c._push(self._spec, OperationKind.DELETE, {"id": record_id})
