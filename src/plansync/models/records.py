"""Record models for plans, achievements and notes."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Optional, TypeVar

from plansync.errors import InvalidArgumentError

SyncState = Literal["pending", "reconciled"]
SYNC_STATES: tuple[str, ...] = ("pending", "reconciled")

ACHIEVEMENT_STATUSES: tuple[str, ...] = ("completed", "in-progress", "planned")

R = TypeVar("R", bound="Record")


@dataclass(slots=True)
class Record:
    """
    Fields shared by every synced entity.

    Notes:
        - `id` is assigned client-side at creation and never reassigned.
        - `sync_state` is a local tag only; it is stripped from remote rows.
    """

    LOCAL_ONLY_FIELDS: ClassVar[tuple[str, ...]] = ("sync_state",)

    id: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    sync_state: SyncState = "pending"

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def from_dict(cls: type[R], data: Mapping[str, Any], *, strict: bool = False) -> R:
        """
        Build a record from a mapping.

        strict=True is used for caller input: unknown fields and invalid values
        raise InvalidArgumentError. strict=False is used for remote and
        persisted rows: unknown columns are ignored and a null column falls
        back to the field default.
        """
        if not isinstance(data, Mapping):
            raise InvalidArgumentError(
                f"{cls.__name__} fields must be a mapping",
                details={"type": type(data).__name__},
            )

        names = cls.field_names()
        unknown = sorted(k for k in data if k not in names)
        if strict and unknown:
            raise InvalidArgumentError(
                f"Unknown fields for {cls.__name__}: {', '.join(unknown)}",
                details={"unknown": unknown},
            )

        kwargs = {k: data[k] for k in names if k in data}
        if not strict:
            for f in dataclasses.fields(cls):
                if f.name in kwargs and kwargs[f.name] is None and f.default is not None:
                    del kwargs[f.name]
        record = cls(**kwargs)
        if strict:
            try:
                record.validate()
            except (TypeError, ValueError) as exc:
                raise InvalidArgumentError(
                    f"Invalid {cls.__name__}: {exc}",
                    cause=exc,
                ) from exc
        return record

    def to_dict(self) -> dict[str, Any]:
        """Local representation (includes sync_state)."""
        return {name: getattr(self, name) for name in self.field_names()}

    def to_row(self) -> dict[str, Any]:
        """Remote row representation (local-only fields removed)."""
        row = self.to_dict()
        for name in self.LOCAL_ONLY_FIELDS:
            row.pop(name, None)
        return row

    def replace(self: R, **changes: Any) -> R:
        return dataclasses.replace(self, **changes)

    def validate(self) -> None:
        """Raise ValueError/TypeError when a field holds an invalid value."""
        if not isinstance(self.id, str):
            raise TypeError("id must be a string")
        for name in ("created_at", "updated_at"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{name} must be an ISO-8601 string")
        if self.sync_state not in SYNC_STATES:
            raise ValueError(f"sync_state must be one of {SYNC_STATES}")


@dataclass(slots=True)
class DailyPlan(Record):
    day: str = ""
    date: str = ""
    notes: str = ""
    targets: str = ""

    def validate(self) -> None:
        Record.validate(self)
        _require_str(self, "day", "date", "notes", "targets")


@dataclass(slots=True)
class Achievement(Record):
    title: str = ""
    date: str = ""
    progress: int = 0
    status: str = "planned"

    def validate(self) -> None:
        Record.validate(self)
        _require_str(self, "title", "date")
        # bool is an int subclass; reject it explicitly.
        if isinstance(self.progress, bool) or not isinstance(self.progress, int):
            raise TypeError("progress must be an integer")
        if not 0 <= self.progress <= 100:
            raise ValueError("progress must be between 0 and 100")
        if self.status not in ACHIEVEMENT_STATUSES:
            raise ValueError(f"status must be one of {ACHIEVEMENT_STATUSES}")


@dataclass(slots=True)
class SpecialNote(Record):
    content: str = ""

    def validate(self) -> None:
        Record.validate(self)
        _require_str(self, "content")


def _require_str(record: Record, *names: str) -> None:
    for name in names:
        if not isinstance(getattr(record, name), str):
            raise TypeError(f"{name} must be a string")
