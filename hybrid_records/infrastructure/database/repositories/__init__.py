from .record_store import SqlRecordStore, parse_record_id

__all__ = [
    "SqlRecordStore",
    "parse_record_id",
]
