"""Multi-tenant JSON record store over a single generic SQL table."""

from hybrid_records.application.interfaces import (
    CurrentDateTime,
    JsonConverter,
    RecordStore,
    SchemaManager,
    TenantContext,
    UserContext,
)
from hybrid_records.application.schemas import (
    Filter,
    GetRequest,
    InsertRequest,
    ListRequest,
    UpdateRequest,
)
from hybrid_records.config import RecordTableOptions, Settings, get_settings
from hybrid_records.domain.entities import PagedResponse, Record, SortBy, SortOrder
from hybrid_records.domain.exceptions import InvalidArgumentError, MergeConflictError
from hybrid_records.infrastructure.contexts import StaticTenantContext, StaticUserContext, SystemClock
from hybrid_records.infrastructure.database import SqlRecordStore, SqlSchemaManager
from hybrid_records.infrastructure.dependencies import RecordStoreFactory
from hybrid_records.infrastructure.logging.log_config import setup_logging
from hybrid_records.infrastructure.serialization import PydanticJsonConverter

__version__ = "0.1.0"

__all__ = [
    "CurrentDateTime",
    "JsonConverter",
    "RecordStore",
    "SchemaManager",
    "TenantContext",
    "UserContext",
    "Filter",
    "GetRequest",
    "InsertRequest",
    "ListRequest",
    "UpdateRequest",
    "RecordTableOptions",
    "Settings",
    "get_settings",
    "PagedResponse",
    "Record",
    "SortBy",
    "SortOrder",
    "InvalidArgumentError",
    "MergeConflictError",
    "StaticTenantContext",
    "StaticUserContext",
    "SystemClock",
    "SqlRecordStore",
    "SqlSchemaManager",
    "RecordStoreFactory",
    "setup_logging",
    "PydanticJsonConverter",
]
