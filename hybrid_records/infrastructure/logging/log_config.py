"""Per-category log levels for the record store.

Two categories sit under the root level: ``log_level_sql`` for SQLAlchemy and
the database drivers, ``log_level_store`` for this package's statement and
schema logs. Call :func:`setup_logging` once when the host process starts.
"""

import logging
import sys

from hybrid_records.config import Settings, get_settings

_SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg", "psycopg")
_STORE_LOGGERS = ("hybrid_records.infrastructure.database",)


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the configured levels; add a stderr handler only if none exists."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
        root.addHandler(handler)

    for names, raw_level in (
        (_SQL_LOGGERS, settings.log_level_sql),
        (_STORE_LOGGERS, settings.log_level_store),
    ):
        level = _parse_level(raw_level)
        for name in names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s store=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_store,
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names mean INFO."""
    numeric = logging.getLevelName(raw.upper())
    return numeric if isinstance(numeric, int) else logging.INFO
