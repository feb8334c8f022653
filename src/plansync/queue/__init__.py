"""Public pending-queue exports for plansync."""

from __future__ import annotations

from .operation import OperationKind, SyncOperation
from .pending_queue import PendingQueue

__all__ = ["OperationKind", "SyncOperation", "PendingQueue"]
