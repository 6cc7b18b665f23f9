"""Thin statement executors over SQLAlchemy engines.

Each call borrows its own connection from the engine's pool and returns it
before the call completes; nothing is shared between concurrent calls. Errors
from the driver propagate unchanged.
"""

import logging
from typing import Any

from sqlalchemy.engine import Dialect, Engine, RowMapping
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Executable

logger = logging.getLogger(__name__)

# Bind names whose values are payload documents; logged by size only.
_REDACTED_PARAMS = frozenset({"document"})


def describe_params(params: dict[str, Any]) -> dict[str, Any]:
    """Parameters safe to log; payload documents are reduced to their size."""
    return {
        name: f"<{len(value)} chars>"
        if name in _REDACTED_PARAMS and isinstance(value, str)
        else value
        for name, value in params.items()
    }


def _log(statement: Executable, dialect: Dialect) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    compiled = statement.compile(dialect=dialect)
    logger.debug("Executing SQL: %s\nParameters: %s", compiled, describe_params(compiled.params))


class SqlExecutor:
    """Awaitable execute/query capability backed by an ``AsyncEngine``."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    async def execute(self, statement: Executable) -> int:
        """Run a write statement in its own transaction; returns affected rows."""
        _log(statement, self._engine.dialect)
        async with self._engine.begin() as conn:
            result = await conn.execute(statement)
            return result.rowcount

    async def query(self, statement: Executable) -> list[RowMapping]:
        _log(statement, self._engine.dialect)
        async with self._engine.connect() as conn:
            result = await conn.execute(statement)
            return list(result.mappings().all())

    async def query_single_or_default(self, statement: Executable) -> RowMapping | None:
        """Return the only row, ``None`` when there is none; more than one row is an error."""
        _log(statement, self._engine.dialect)
        async with self._engine.connect() as conn:
            result = await conn.execute(statement)
            return result.mappings().one_or_none()

    async def query_scalar(self, statement: Executable) -> Any:
        _log(statement, self._engine.dialect)
        async with self._engine.connect() as conn:
            result = await conn.execute(statement)
            return result.scalar_one()


class BlockingSqlExecutor:
    """Blocking counterpart of :class:`SqlExecutor` for synchronous callers."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def query_scalar(self, statement: Executable) -> Any:
        _log(statement, self._engine.dialect)
        with self._engine.connect() as conn:
            result = conn.execute(statement)
            return result.scalar_one()
