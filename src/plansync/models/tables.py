"""Remote tables and their per-table sync settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .records import Achievement, DailyPlan, Record, SpecialNote


class Table(str, Enum):
    """Remote tables managed by the sync layer."""

    DAILY_PLANS = "daily_plans"
    ACHIEVEMENTS = "achievements"
    SPECIAL_NOTES = "special_notes"


@dataclass(frozen=True)
class TableSpec:
    """
    How one entity type is stored locally and fetched remotely.

    order_by is always applied descending (newest first).
    """

    table: Table
    storage_key: str
    record_cls: type[Record]
    order_by: str


TABLE_SPECS: dict[Table, TableSpec] = {
    Table.DAILY_PLANS: TableSpec(
        table=Table.DAILY_PLANS,
        storage_key="daily_plans",
        record_cls=DailyPlan,
        order_by="date",
    ),
    Table.ACHIEVEMENTS: TableSpec(
        table=Table.ACHIEVEMENTS,
        storage_key="achievements",
        record_cls=Achievement,
        order_by="date",
    ),
    Table.SPECIAL_NOTES: TableSpec(
        table=Table.SPECIAL_NOTES,
        storage_key="special_notes",
        record_cls=SpecialNote,
        order_by="created_at",
    ),
}
