"""Creates and drops the record table through SQLAlchemy's DDL support."""

import logging

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from hybrid_records.application.interfaces import SchemaManager
from hybrid_records.config import RecordTableOptions
from hybrid_records.infrastructure.database.models import build_record_table

logger = logging.getLogger(__name__)


class SqlSchemaManager(SchemaManager):
    """Idempotent lifecycle of the configured record table and its indexes."""

    def __init__(self, engine: AsyncEngine, options: RecordTableOptions):
        self._engine = engine
        self._table = build_record_table(options)

    async def exists(self) -> bool:
        """Check the database catalogue for the table."""
        name = self._table.name
        logger.info("Checking if %s exists...", name)
        async with self._engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(name))

    async def init(self) -> None:
        if await self.exists():
            logger.debug("Table %s exists.", self._table.name)
            return

        logger.info("Table %s does not exist. Creating table and indexes", self._table.name)
        async with self._engine.begin() as conn:
            await conn.run_sync(self._table.create, checkfirst=True)
        logger.info("Table %s created", self._table.name)

    async def drop(self) -> None:
        logger.info("Dropping %s...", self._table.name)
        async with self._engine.begin() as conn:
            await conn.run_sync(self._table.drop, checkfirst=True)
