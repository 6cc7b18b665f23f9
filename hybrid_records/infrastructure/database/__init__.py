from .executor import BlockingSqlExecutor, SqlExecutor
from .models import build_record_table
from .predicates import RESERVED_PARAMETERS, PredicateBuilder
from .repositories import SqlRecordStore
from .schema_manager import SqlSchemaManager
from .session import create_blocking_record_engine, create_record_engine

__all__ = [
    "BlockingSqlExecutor",
    "SqlExecutor",
    "build_record_table",
    "RESERVED_PARAMETERS",
    "PredicateBuilder",
    "SqlRecordStore",
    "SqlSchemaManager",
    "create_blocking_record_engine",
    "create_record_engine",
]
