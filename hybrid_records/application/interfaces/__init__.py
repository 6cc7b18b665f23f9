from .contexts import CurrentDateTime, TenantContext, UserContext
from .json_converter import JsonConverter
from .record_store import RecordStore
from .schema_manager import SchemaManager

__all__ = [
    "CurrentDateTime",
    "TenantContext",
    "UserContext",
    "JsonConverter",
    "RecordStore",
    "SchemaManager",
]
