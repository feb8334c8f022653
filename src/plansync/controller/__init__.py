"""Internal controller exports for plansync."""

from __future__ import annotations

from .remote_client import RemoteClient

__all__ = ["RemoteClient"]
