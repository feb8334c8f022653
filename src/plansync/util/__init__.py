from .ids import new_op_id, new_record_id, new_uuid
from .time import normalize_dt, now_iso, now_utc, parse_iso8601, to_iso8601

__all__ = [
    "new_uuid",
    "new_op_id",
    "new_record_id",
    "now_utc",
    "now_iso",
    "parse_iso8601",
    "to_iso8601",
    "normalize_dt",
]
