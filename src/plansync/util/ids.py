from __future__ import annotations

import threading
import time
import uuid

_record_id_lock = threading.Lock()
_last_record_ms = 0


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_op_id() -> str:
    """Generate a new SyncOperation ID."""
    return new_uuid()


def new_record_id() -> str:
    """
    Generate a record id from the current epoch milliseconds.

    Ids are strictly increasing within a process: when two calls land in the
    same millisecond (or the clock steps back) the previous value is bumped.
    """
    global _last_record_ms
    with _record_id_lock:
        now_ms = time.time_ns() // 1_000_000
        if now_ms <= _last_record_ms:
            now_ms = _last_record_ms + 1
        _last_record_ms = now_ms
        return str(now_ms)
