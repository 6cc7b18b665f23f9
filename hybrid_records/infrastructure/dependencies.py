"""Dependency wiring: builds per-scope record stores from process-wide resources."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncEngine

from hybrid_records.application.interfaces import CurrentDateTime, JsonConverter
from hybrid_records.config import Settings, get_settings
from hybrid_records.infrastructure.contexts import StaticTenantContext, StaticUserContext, SystemClock
from hybrid_records.infrastructure.database.executor import BlockingSqlExecutor, SqlExecutor
from hybrid_records.infrastructure.database.models import build_record_table
from hybrid_records.infrastructure.database.repositories import SqlRecordStore
from hybrid_records.infrastructure.database.schema_manager import SqlSchemaManager
from hybrid_records.infrastructure.database.session import (
    create_blocking_record_engine,
    create_record_engine,
)
from hybrid_records.infrastructure.serialization import PydanticJsonConverter


class RecordStoreFactory:
    """Owns the engines, codec and clock; hands out one store per request scope.

    Create it once per process and call :meth:`dispose` on shutdown.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        json_converter: JsonConverter | None = None,
        clock: CurrentDateTime | None = None,
    ):
        self._settings = settings or get_settings()
        self._engine = create_record_engine(self._settings)
        self._blocking_engine = create_blocking_record_engine(self._settings)
        self._table = build_record_table(self._settings.records)
        self._json_converter = json_converter or PydanticJsonConverter()
        self._clock = clock or SystemClock()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def create(self, *, tenant_id: UUID | None = None, user_id: UUID | None = None) -> SqlRecordStore:
        """Provides a record store bound to one tenant/user scope."""
        return SqlRecordStore(
            SqlExecutor(self._engine),
            blocking_executor=BlockingSqlExecutor(self._blocking_engine),
            table=self._table,
            json_converter=self._json_converter,
            tenant_context=StaticTenantContext(tenant_id),
            user_context=StaticUserContext(user_id),
            clock=self._clock,
        )

    def schema_manager(self) -> SqlSchemaManager:
        return SqlSchemaManager(self._engine, self._settings.records)

    async def dispose(self) -> None:
        await self._engine.dispose()
        self._blocking_engine.dispose()
