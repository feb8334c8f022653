"""Queued mutation model (explicit fields; persisted as a plain dict)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from plansync.models import Table


class OperationKind(str, Enum):
    """Remote mutation kinds that can be deferred."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(slots=True)
class SyncOperation:
    """
    A mutation not yet confirmed against the remote store.

    payload is the full remote row for INSERT/UPDATE and {"id": ...} for DELETE.
    Persisted shape: {id, table, operation, data, timestamp}.
    """

    id: str
    table: Table
    kind: OperationKind
    payload: dict[str, Any]
    enqueued_at: str

    @property
    def record_id(self) -> Optional[str]:
        value = self.payload.get("id")
        return value if isinstance(value, str) else None

    def validate_required_fields(self) -> None:
        """Raise ValueError if the operation cannot be applied remotely."""
        _require(self.id, "id")
        _require(self.enqueued_at, "enqueued_at")
        if not isinstance(self.table, Table):
            raise ValueError(f"Unsupported table: {self.table}")
        if not isinstance(self.kind, OperationKind):
            raise ValueError(f"Unsupported operation: {self.kind}")
        if not isinstance(self.payload, dict):
            raise ValueError("payload must be a dict")
        _require(self.record_id, "payload.id")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "table": self.table.value,
            "operation": self.kind.value,
            "data": dict(self.payload),
            "timestamp": self.enqueued_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SyncOperation":
        """Parse a persisted entry. Raises ValueError when malformed."""
        if not isinstance(data, dict):
            raise ValueError("operation entry must be a dict")

        payload = data.get("data")
        op = cls(
            id=data.get("id"),  # type: ignore[arg-type]
            table=Table(data.get("table")),
            kind=OperationKind(data.get("operation")),
            payload=dict(payload) if isinstance(payload, dict) else payload,
            enqueued_at=data.get("timestamp"),  # type: ignore[arg-type]
        )
        op.validate_required_fields()
        return op


def _require(value: object, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Missing required field: {field_name}")
