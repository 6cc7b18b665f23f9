"""SQL predicate expressions shared by every record store statement.

Clauses are SQLAlchemy Core expressions over the record table, so every value
travels as a bound parameter. The caller's filter is the only raw SQL text.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Table, Text, TextClause, bindparam, cast, or_, text, true
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import ArgumentError
from sqlalchemy.sql.elements import ColumnElement, UnaryExpression

from hybrid_records.application.schemas import Filter
from hybrid_records.domain.entities import SortBy, SortOrder
from hybrid_records.domain.exceptions import InvalidArgumentError, MergeConflictError

# Parameter names the store binds itself; filters may not reuse them.
RESERVED_PARAMETERS = frozenset({"id", "type", "tenant_id", "include_deleted", "page_size", "offset"})


def _parameter_key(name: str) -> str:
    """``TenantId``, ``tenant_id`` and ``TENANT_ID`` all name the same parameter."""
    return name.lower().replace("_", "")


_RESERVED_KEYS = frozenset(_parameter_key(name) for name in RESERVED_PARAMETERS)


class PredicateBuilder:
    """Builds the tenant, soft-delete, type and ordering clauses for one table."""

    def __init__(self, table: Table, dialect_name: str):
        self._table = table
        self._dialect_name = dialect_name
        self._sort_columns = {
            SortBy.CREATED: table.c.created_at,
            SortBy.UPDATED: table.c.updated_at,
            SortBy.DELETED: table.c.deleted_at,
        }

    # ── Clauses ──────────────────────────────────────────────────────

    def tenant_clause(self, tenant_id: UUID | None) -> ColumnElement[bool]:
        """Global records, plus the records of ``tenant_id`` when it is set."""
        column = self._table.c.tenant_id
        if tenant_id is None:
            return column.is_(None)
        return or_(column.is_(None), column == tenant_id)

    def soft_delete_clause(self, include_deleted: bool) -> ColumnElement[bool]:
        if include_deleted:
            return true()
        return self.not_deleted_clause()

    def not_deleted_clause(self) -> ColumnElement[bool]:
        return self._table.c.deleted_at.is_(None)

    def type_clause(self, record_type: str | None) -> ColumnElement[bool]:
        """Exact type match; ``None`` matches every type."""
        if record_type is None:
            return true()
        return self._table.c.type == record_type

    def id_clause(self, record_id: UUID) -> ColumnElement[bool]:
        return self._table.c.id == record_id

    def filter_clause(self, filter: Filter) -> TextClause:
        """The caller's fragment, parenthesised so an OR cannot widen the other clauses.

        Raises MergeConflictError when a parameter reuses a reserved name,
        compared case- and underscore-insensitively, instead of letting either
        value silently win.
        """
        conflicts = [
            name for name in filter.parameters if _parameter_key(name) in _RESERVED_KEYS
        ]
        if conflicts:
            raise MergeConflictError(conflicts)

        for name in filter.parameters:
            if not name.isidentifier():
                raise InvalidArgumentError("filter", f"parameter name {name!r} is not an identifier")

        clause = text(f"({filter.query})")
        try:
            return clause.bindparams(**filter.parameters)
        except ArgumentError as exc:
            raise InvalidArgumentError("filter", str(exc)) from None

    def order_by(self, sort_by: SortBy, sort_order: SortOrder) -> list[UnaryExpression[Any]]:
        """ORDER BY terms for a listing; the id breaks ties so pages never overlap."""
        column = self._sort_columns.get(sort_by)
        if column is None:
            raise InvalidArgumentError("sort_by", f"unknown sort key {sort_by!r}")
        id_column = self._table.c.id
        if sort_order == SortOrder.ASCENDING:
            return [column.asc(), id_column.asc()]
        if sort_order == SortOrder.DESCENDING:
            return [column.desc(), id_column.desc()]
        raise InvalidArgumentError("sort_order", f"unknown sort direction {sort_order!r}")

    def data_value(self, document: str) -> ColumnElement[Any]:
        """Bind expression for an already serialized payload document."""
        value = bindparam("document", document, type_=Text)
        if self._dialect_name == "postgresql":
            return cast(value, JSONB)
        return value
