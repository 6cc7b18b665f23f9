"""Concrete record store backed by SQLAlchemy Core statements on the record table."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import Table, Text, delete, exists, func, insert, select, type_coerce, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from hybrid_records.application.interfaces import (
    CurrentDateTime,
    JsonConverter,
    RecordStore,
    TenantContext,
    UserContext,
)
from hybrid_records.application.schemas import GetRequest, InsertRequest, ListRequest, UpdateRequest
from hybrid_records.domain.entities import PagedResponse, Record
from hybrid_records.domain.exceptions import InvalidArgumentError
from hybrid_records.infrastructure.database.executor import BlockingSqlExecutor, SqlExecutor
from hybrid_records.infrastructure.database.predicates import PredicateBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_record_id(value: Any) -> UUID:
    """Parse a caller-supplied id string, naming the ``id`` argument on failure."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgumentError("id", "cannot be null, empty, or whitespace")
    if not isinstance(value, str):
        raise InvalidArgumentError("id", f"expected a UUID or string, got {type(value).__name__}")
    try:
        return UUID(value)
    except ValueError:
        raise InvalidArgumentError("id", f"'{value}' is not a valid UUID format") from None


def _as_utc(value: datetime | None) -> datetime | None:
    """Timestamps come back naive from drivers without zone support; they are UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlRecordStore(RecordStore):
    """Implements the RecordStore port for one tenant/user scope.

    The tenant, user and clock are read once per operation. Instances hold no
    record state, so one store per request scope is cheap and safe.
    """

    def __init__(
        self,
        executor: SqlExecutor,
        *,
        table: Table,
        json_converter: JsonConverter,
        tenant_context: TenantContext,
        user_context: UserContext,
        clock: CurrentDateTime,
        blocking_executor: BlockingSqlExecutor | None = None,
    ):
        self._executor = executor
        self._blocking_executor = blocking_executor
        self._table = table
        self._json = json_converter
        self._tenant_context = tenant_context
        self._user_context = user_context
        self._clock = clock
        self._predicates = PredicateBuilder(table, executor.dialect_name)
        # The document is read back as text so the codec alone decodes it.
        self._columns = [
            (type_coerce(column, Text) if column.key == "data" else column).label(column.key)
            for column in table.c
        ]

    # ── Writes ───────────────────────────────────────────────────────

    async def insert(self, request: InsertRequest) -> int:
        tenant_id = self._tenant_context.tenant_id if request.is_tenant_data else None
        stmt = insert(self._table).values(
            id=request.id,
            type=request.type,
            tenant_id=tenant_id,
            data=self._predicates.data_value(self._json.serialize(request.data)),
            created_at=self._now(),
            created_by=self._user_context.user_id,
        )
        affected = await self._executor.execute(stmt)
        logger.debug("Inserted %s record %s (tenant=%s)", request.type, request.id, tenant_id)
        return affected

    async def update(self, request: UpdateRequest) -> int:
        p = self._predicates
        stmt = (
            update(self._table)
            .where(
                p.id_clause(request.id),
                p.type_clause(request.type),
                p.tenant_clause(self._tenant_context.tenant_id),
            )
            .values(
                data=p.data_value(self._json.serialize(request.data)),
                updated_at=self._now(),
                updated_by=self._user_context.user_id,
            )
        )
        affected = await self._executor.execute(stmt)
        if not affected:
            logger.debug("Update of %s record %s matched no visible row", request.type, request.id)
        return affected

    async def delete(self, record_id: UUID) -> int:
        p = self._predicates
        stmt = delete(self._table).where(
            p.id_clause(record_id), p.tenant_clause(self._tenant_context.tenant_id)
        )
        return await self._executor.execute(stmt)

    async def soft_delete(self, record_id: UUID) -> int:
        p = self._predicates
        stmt = (
            update(self._table)
            .where(p.id_clause(record_id), p.tenant_clause(self._tenant_context.tenant_id))
            .values(deleted_at=self._now(), deleted_by=self._user_context.user_id)
        )
        return await self._executor.execute(stmt)

    # ── Reads ────────────────────────────────────────────────────────

    async def get(
        self, record: UUID | str | GetRequest, data_type: type[T] = Any
    ) -> Record[T] | None:
        request = self._to_get_request(record)
        p = self._predicates
        stmt = select(*self._columns).where(
            p.tenant_clause(self._tenant_context.tenant_id),
            p.id_clause(request.id),
            p.type_clause(request.type),
            p.soft_delete_clause(request.include_deleted),
        )
        row = await self._executor.query_single_or_default(stmt)
        return self._to_record(row, data_type) if row is not None else None

    async def list(self, request: ListRequest, data_type: type[T] = Any) -> list[Record[T]]:
        stmt = self._listing(request)
        rows = await self._executor.query(stmt)
        return [self._to_record(row, data_type) for row in rows]

    async def list_paged(
        self, request: ListRequest, data_type: type[T] = Any
    ) -> PagedResponse[T]:
        if request.page_number < 1:
            raise InvalidArgumentError("page_number", "must be at least 1")
        if request.page_size < 1:
            raise InvalidArgumentError("page_size", "must be at least 1")

        conditions = self._listing_conditions(request)
        count_stmt = select(func.count()).select_from(self._table).where(*conditions)
        total_count = await self._executor.query_scalar(count_stmt)

        page_stmt = (
            self._listing(request)
            .limit(request.page_size)
            .offset((request.page_number - 1) * request.page_size)
        )
        rows = await self._executor.query(page_stmt)

        return PagedResponse(
            records=[self._to_record(row, data_type) for row in rows],
            total_count=int(total_count),
            page_number=request.page_number,
            page_size=request.page_size,
        )

    async def exists_async(self, record_id: UUID) -> bool:
        return bool(await self._executor.query_scalar(self._exists_statement(record_id)))

    def exists(self, record_id: UUID) -> bool:
        if self._blocking_executor is None:
            raise RuntimeError("exists() needs a store created with a blocking executor")
        return bool(self._blocking_executor.query_scalar(self._exists_statement(record_id)))

    # ── Statement helpers ────────────────────────────────────────────

    def _listing_conditions(self, request: ListRequest) -> list[ColumnElement[bool]]:
        """WHERE conditions shared by list, list_paged and the page count."""
        p = self._predicates
        conditions = [
            p.tenant_clause(self._tenant_context.tenant_id),
            p.type_clause(request.type),
            p.soft_delete_clause(request.include_deleted),
        ]
        if request.filter is not None:
            conditions.append(p.filter_clause(request.filter))
        return conditions

    def _listing(self, request: ListRequest) -> Select:
        order_by = self._predicates.order_by(request.sort_by, request.sort_order)
        return select(*self._columns).where(*self._listing_conditions(request)).order_by(*order_by)

    def _exists_statement(self, record_id: UUID) -> Select:
        p = self._predicates
        return select(
            exists().where(
                p.id_clause(record_id),
                p.tenant_clause(self._tenant_context.tenant_id),
                p.not_deleted_clause(),
            )
        )

    @staticmethod
    def _to_get_request(record: UUID | str | GetRequest) -> GetRequest:
        if isinstance(record, GetRequest):
            return record
        if isinstance(record, UUID):
            return GetRequest(id=record)
        return GetRequest(id=parse_record_id(record))

    def _now(self) -> datetime:
        return _as_utc(self._clock.utc_now())

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_record(self, row: RowMapping, data_type: type[T]) -> Record[T]:
        """Map a neutral row → typed domain record, decoding the payload via the codec."""
        document = row["data"]
        if not isinstance(document, str):
            document = self._json.serialize(document)
        return Record(
            id=row["id"],
            type=row["type"],
            tenant_id=row["tenant_id"],
            data=self._json.deserialize(document, data_type),
            created_at=_as_utc(row["created_at"]),
            created_by=row["created_by"],
            updated_at=_as_utc(row["updated_at"]),
            updated_by=row["updated_by"],
            deleted_at=_as_utc(row["deleted_at"]),
            deleted_by=row["deleted_by"],
        )
