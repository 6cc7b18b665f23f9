"""SQLAlchemy engine configuration for the async and blocking store paths."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from hybrid_records.config import Settings


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _get_sync_url(url: str) -> str:
    """Convert a configured URL to one served by a blocking driver."""
    if url.startswith("sqlite+aiosqlite:///"):
        return url.replace("sqlite+aiosqlite:///", "sqlite:///", 1)
    if url.startswith("postgresql+asyncpg://"):
        return url.replace("postgresql+asyncpg://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def create_record_engine(settings: Settings) -> AsyncEngine:
    """Async engine used by every awaitable store and schema operation."""
    return create_async_engine(
        _get_async_url(settings.database_url),
        echo=settings.database_echo,
        pool_pre_ping=settings.database_pool_pre_ping,
    )


def create_blocking_record_engine(settings: Settings) -> Engine:
    """Blocking engine on the same database, used by the synchronous exists check."""
    return create_engine(
        _get_sync_url(settings.database_url),
        echo=settings.database_echo,
        pool_pre_ping=settings.database_pool_pre_ping,
    )
