"""LocalStore: best-effort, key-scoped JSON persistence on the device."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Optional

from plansync.errors import LocalPersistenceError
from plansync.models import LoadResult, StoreResult

logger = logging.getLogger(__name__)


class LocalStore:
    """
    Durable key -> JSON value store backed by one file per key.

    Never raises on I/O or serialization faults: they are logged and returned
    inside StoreResult/LoadResult. A failed load degrades to an empty collection.
    There is no cross-key transactionality.
    """

    def __init__(self, root_dir: str) -> None:
        if not isinstance(root_dir, str) or not root_dir.strip():
            raise ValueError("root_dir must be a non-empty string")
        self._root_dir = root_dir

    @property
    def root_dir(self) -> str:
        return self._root_dir

    def path_for(self, key: str) -> str:
        _check_key(key)
        return os.path.join(self._root_dir, f"{key}.json")

    # ----------------------------
    # Collections
    # ----------------------------
    def save(self, key: str, items: list[dict[str, Any]]) -> StoreResult:
        """Replace the collection stored under key (order preserved)."""
        return self.save_value(key, list(items))

    def load(self, key: str) -> list[dict[str, Any]]:
        """Return the collection under key, or [] if missing or unreadable."""
        return self.try_load(key).items

    def try_load(self, key: str) -> LoadResult:
        """Like load(), but reports the persistence fault explicitly."""
        value, error = self._read(key, [])
        if error is not None:
            return LoadResult(key=key, error=error)
        if not isinstance(value, list):
            error = LocalPersistenceError(
                "Stored value is not a collection",
                details={"key": key, "type": type(value).__name__},
            )
            logger.error("Error getting from local storage: %s", error)
            return LoadResult(key=key, error=error)
        return LoadResult(key=key, items=value)

    # ----------------------------
    # Scalars
    # ----------------------------
    def save_value(self, key: str, value: Any) -> StoreResult:
        """Persist any JSON-serializable value under key (atomic replace)."""
        path = self.path_for(key)
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            error = LocalPersistenceError(
                "Failed to serialize value",
                details={"key": key},
                cause=exc,
            )
            logger.error("Error saving to local storage: %s (key=%s)", exc, key)
            return StoreResult(key=key, error=error)

        try:
            os.makedirs(self._root_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self._root_dir
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_path, path)
            except BaseException:
                _remove_quietly(tmp_path)
                raise
        except OSError as exc:
            error = LocalPersistenceError(
                "Failed to write local storage",
                details={"key": key, "path": path},
                cause=exc,
            )
            logger.error("Error saving to local storage: %s (key=%s)", exc, key)
            return StoreResult(key=key, error=error)

        return StoreResult(key=key)

    def load_value(self, key: str, default: Any = None) -> Any:
        """Return the value under key, or default if missing or unreadable."""
        value, _ = self._read(key, default)
        return value

    def remove(self, key: str) -> StoreResult:
        path = self.path_for(key)
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.error("Error removing local storage key %s: %s", key, exc)
            return StoreResult(
                key=key,
                error=LocalPersistenceError(
                    "Failed to remove local storage",
                    details={"key": key, "path": path},
                    cause=exc,
                ),
            )
        return StoreResult(key=key)

    # ----------------------------
    # Internals
    # ----------------------------
    def _read(
        self, key: str, default: Any
    ) -> tuple[Any, Optional[LocalPersistenceError]]:
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return default, None
        except OSError as exc:
            logger.error("Error getting from local storage: %s (key=%s)", exc, key)
            return default, LocalPersistenceError(
                "Failed to read local storage",
                details={"key": key, "path": path},
                cause=exc,
            )

        if not raw.strip():
            return default, None

        try:
            return json.loads(raw), None
        except ValueError as exc:
            logger.error("Error getting from local storage: %s (key=%s)", exc, key)
            return default, LocalPersistenceError(
                "Stored value is not valid JSON",
                details={"key": key, "path": path},
                cause=exc,
            )


def _check_key(key: str) -> None:
    if not isinstance(key, str) or not key.strip():
        raise ValueError("key must be a non-empty string")
    if os.sep in key or (os.altsep and os.altsep in key) or key.startswith("."):
        raise ValueError(f"key must be a plain name: {key!r}")


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        pass
