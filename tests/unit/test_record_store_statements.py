"""Unit tests for the statements SqlRecordStore hands to its executor."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.dialects import postgresql

from hybrid_records import (
    Filter,
    GetRequest,
    InsertRequest,
    ListRequest,
    PydanticJsonConverter,
    RecordTableOptions,
    SqlRecordStore,
    StaticTenantContext,
    StaticUserContext,
    UpdateRequest,
)
from hybrid_records.infrastructure.database.models import build_record_table
from tests.support.payloads import Car, SteppingClock


# ── Fakes ────────────────────────────────────────────────────────────


class FakeExecutor:
    """Records statements and answers with canned results."""

    def __init__(self, dialect_name: str = "sqlite", rows=None, scalar=None, rowcount: int = 1):
        self.dialect_name = dialect_name
        self.statements = []
        self._rows = rows or []
        self._scalar = scalar
        self._rowcount = rowcount

    async def execute(self, statement) -> int:
        self.statements.append(statement)
        return self._rowcount

    async def query(self, statement):
        self.statements.append(statement)
        return self._rows

    async def query_single_or_default(self, statement):
        self.statements.append(statement)
        return self._rows[0] if self._rows else None

    async def query_scalar(self, statement):
        self.statements.append(statement)
        return self._scalar


class FakeBlockingExecutor:
    def __init__(self, scalar):
        self.statements = []
        self._scalar = scalar

    def query_scalar(self, statement):
        self.statements.append(statement)
        return self._scalar


TENANT = uuid.uuid4()
USER = uuid.uuid4()


def _compile(statement):
    """Render a statement the way PostgreSQL would receive it."""
    compiled = statement.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


def _store(executor, *, tenant_id=TENANT, user_id=USER, blocking_executor=None, clock=None, options=None):
    return SqlRecordStore(
        executor,
        table=build_record_table(options or RecordTableOptions()),
        json_converter=PydanticJsonConverter(),
        tenant_context=StaticTenantContext(tenant_id),
        user_context=StaticUserContext(user_id),
        clock=clock or SteppingClock(),
        blocking_executor=blocking_executor,
    )


def _row(car_id, **overrides):
    row = {
        "id": car_id,
        "type": Car.TYPE,
        "tenant_id": TENANT,
        "data": f'{{"id": "{car_id}", "make": "Toyota", "model": "Prius"}}',
        "created_at": datetime(2024, 1, 1, 12, 0),
        "created_by": USER,
        "updated_at": None,
        "updated_by": None,
        "deleted_at": None,
        "deleted_by": None,
    }
    row.update(overrides)
    return row


# ── Writes ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_insert_binds_tenant_user_and_clock():
    executor = FakeExecutor()
    clock = SteppingClock()
    car_id = uuid.uuid4()

    await _store(executor, clock=clock).insert(
        InsertRequest(id=car_id, type=Car.TYPE, data=Car(id=car_id, make="Toyota", model="Prius"))
    )

    sql, params = _compile(executor.statements[0])
    assert sql.startswith("INSERT INTO records")
    assert params["tenant_id"] == TENANT
    assert params["created_by"] == USER
    assert params["created_at"] == clock.last
    assert '"make":"Toyota"' in params["document"]


@pytest.mark.asyncio
async def test_insert_of_global_record_binds_null_tenant():
    executor = FakeExecutor()

    await _store(executor).insert(
        InsertRequest(id=uuid.uuid4(), type=Car.TYPE, data={"make": "Kia"}, is_tenant_data=False)
    )

    _, params = _compile(executor.statements[0])
    assert params["tenant_id"] is None


@pytest.mark.asyncio
async def test_insert_casts_payload_on_postgresql():
    executor = FakeExecutor(dialect_name="postgresql")

    await _store(executor).insert(InsertRequest(id=uuid.uuid4(), type=Car.TYPE, data={}))

    sql, _ = _compile(executor.statements[0])
    assert "CAST(%(document)s AS JSONB)" in sql


@pytest.mark.asyncio
async def test_update_requires_id_type_and_tenant():
    executor = FakeExecutor(rowcount=0)

    affected = await _store(executor).update(
        UpdateRequest(id=uuid.uuid4(), type=Car.TYPE, data={"make": "Kia"})
    )

    sql, params = _compile(executor.statements[0])
    assert affected == 0
    assert sql.startswith("UPDATE records SET data=")
    assert "records.id = %(" in sql
    assert "records.type = %(" in sql
    assert "records.tenant_id IS NULL OR records.tenant_id = %(" in sql
    assert params["updated_by"] == USER
    assert Car.TYPE in params.values()


@pytest.mark.asyncio
async def test_soft_delete_stamps_deletion():
    executor = FakeExecutor()
    clock = SteppingClock()

    await _store(executor, clock=clock).soft_delete(uuid.uuid4())

    sql, params = _compile(executor.statements[0])
    assert sql.startswith("UPDATE records SET deleted_at=")
    assert params["deleted_at"] == clock.last
    assert params["deleted_by"] == USER


@pytest.mark.asyncio
async def test_delete_without_tenant_only_reaches_global_records():
    executor = FakeExecutor()

    await _store(executor, tenant_id=None).delete(uuid.uuid4())

    sql, _ = _compile(executor.statements[0])
    assert sql.startswith("DELETE FROM records")
    assert sql.endswith("AND records.tenant_id IS NULL")


@pytest.mark.asyncio
async def test_statements_use_configured_column_names():
    executor = FakeExecutor()
    options = RecordTableOptions(table_name="documents", tenant_id_column="org_id", data_column="body")

    await _store(executor, options=options).insert(
        InsertRequest(id=uuid.uuid4(), type=Car.TYPE, data={"make": "Kia"})
    )

    sql, _ = _compile(executor.statements[0])
    assert sql.startswith("INSERT INTO documents (id, type, org_id, body,")


# ── Reads ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_maps_row_to_typed_record_with_utc_timestamps():
    car_id = uuid.uuid4()
    executor = FakeExecutor(rows=[_row(car_id)])

    record = await _store(executor).get(car_id, Car)

    sql, _ = _compile(executor.statements[0])
    assert record.data == Car(id=car_id, make="Toyota", model="Prius")
    assert record.created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert "records.deleted_at IS NULL" in sql
    assert "records.type =" not in sql


@pytest.mark.asyncio
async def test_get_reads_configured_columns_under_default_names():
    executor = FakeExecutor()
    options = RecordTableOptions(tenant_id_column="org_id", data_column="body")

    await _store(executor, options=options).get(uuid.uuid4())

    sql, _ = _compile(executor.statements[0])
    assert "records.org_id AS tenant_id" in sql
    assert "records.body AS data" in sql


@pytest.mark.asyncio
async def test_get_converts_aware_timestamps_to_utc():
    car_id = uuid.uuid4()
    local = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    executor = FakeExecutor(rows=[_row(car_id, created_at=local)])

    record = await _store(executor).get(car_id)

    assert record.created_at == local
    assert record.created_at.tzinfo == timezone.utc


@pytest.mark.asyncio
async def test_get_accepts_already_decoded_documents():
    car_id = uuid.uuid4()
    executor = FakeExecutor(rows=[_row(car_id, data={"id": str(car_id), "make": "Kia", "model": "Rio"})])

    record = await _store(executor).get(GetRequest(id=car_id, type=Car.TYPE, include_deleted=True), Car)

    sql, params = _compile(executor.statements[0])
    assert record.data.make == "Kia"
    assert "records.type = %(" in sql
    assert "deleted_at" not in sql.split("WHERE", 1)[1]
    assert Car.TYPE in params.values()


@pytest.mark.asyncio
async def test_list_appends_parenthesised_filter_and_orders_by_id_last():
    executor = FakeExecutor()

    await _store(executor).list(
        ListRequest(
            type=Car.TYPE,
            filter=Filter(query="data->>'make' = :make", parameters={"make": "Toyota"}),
        )
    )

    sql, params = _compile(executor.statements[0])
    assert params["make"] == "Toyota"
    assert "AND (data->>'make' = %(make)s)" in sql
    assert sql.endswith("ORDER BY records.created_at ASC, records.id ASC")


@pytest.mark.asyncio
async def test_list_paged_counts_then_fetches_window():
    executor = FakeExecutor(scalar=42)

    page = await _store(executor).list_paged(
        ListRequest(type=Car.TYPE, page_number=3, page_size=5)
    )

    count, data = executor.statements
    count_sql, _ = _compile(count)
    data_sql, data_params = _compile(data)
    assert count_sql.startswith("SELECT count(*)")
    assert "FROM records" in count_sql
    assert "LIMIT" not in count_sql
    assert "LIMIT" in data_sql and "OFFSET" in data_sql
    assert 5 in data_params.values()
    assert 10 in data_params.values()
    assert page.total_count == 42
    assert page.total_pages == 9


@pytest.mark.asyncio
async def test_exists_uses_both_executors():
    executor = FakeExecutor(scalar=True)
    blocking = FakeBlockingExecutor(scalar=False)
    store = _store(executor, blocking_executor=blocking)
    car_id = uuid.uuid4()

    assert await store.exists_async(car_id) is True
    assert store.exists(car_id) is False
    async_sql, _ = _compile(executor.statements[0])
    blocking_sql, _ = _compile(blocking.statements[0])
    assert async_sql == blocking_sql
    assert async_sql.startswith("SELECT EXISTS (SELECT *")
    assert "records.deleted_at IS NULL" in blocking_sql


def test_exists_without_blocking_executor_raises():
    with pytest.raises(RuntimeError):
        _store(FakeExecutor()).exists(uuid.uuid4())
