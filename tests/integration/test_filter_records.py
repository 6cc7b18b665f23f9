"""Integration tests for caller filters on listings."""

import uuid

import pytest

from hybrid_records import Filter, InsertRequest, ListRequest, MergeConflictError
from tests.support.payloads import Car


@pytest.fixture
def makes() -> list[tuple[str, str]]:
    return [("Toyota", "Corolla"), ("Honda", "Civic"), ("Toyota", "Yaris"), ("Ford", "Focus")]


async def _insert(store, makes, *, is_tenant_data: bool = True) -> list[uuid.UUID]:
    ids = []
    for make, model in makes:
        car_id = uuid.uuid4()
        await store.insert(
            InsertRequest(
                id=car_id,
                type=Car.TYPE,
                data=Car(id=car_id, make=make, model=model),
                is_tenant_data=is_tenant_data,
            )
        )
        ids.append(car_id)
    return ids


@pytest.mark.asyncio
async def test_filter_on_document_field(factory, tenant1, makes):
    store = factory.create(tenant_id=tenant1.tenant_id)
    ids = await _insert(store, makes)

    records = await store.list(
        ListRequest(
            type=Car.TYPE,
            filter=Filter(query="data->>'make' = :make", parameters={"make": "Toyota"}),
        ),
        Car,
    )

    assert [r.id for r in records] == [ids[0], ids[2]]
    assert [r.data.model for r in records] == ["Corolla", "Yaris"]


@pytest.mark.asyncio
async def test_filter_with_several_parameters(factory, tenant1, makes):
    store = factory.create(tenant_id=tenant1.tenant_id)
    ids = await _insert(store, makes)

    records = await store.list(
        ListRequest(
            type=Car.TYPE,
            filter=Filter(
                query="data->>'make' = :make AND data->>'model' = :model",
                parameters={"make": "Toyota", "model": "Yaris"},
            ),
        )
    )

    assert [r.id for r in records] == [ids[2]]


@pytest.mark.asyncio
async def test_filter_with_or_cannot_widen_tenant_scope(factory, tenant1, tenant2, makes):
    """An OR in the filter stays inside its own parentheses."""
    await _insert(factory.create(tenant_id=tenant2.tenant_id), makes)
    store = factory.create(tenant_id=tenant1.tenant_id)
    own = await _insert(store, makes[:1])

    records = await store.list(
        ListRequest(
            type=Car.TYPE,
            filter=Filter(
                query="data->>'make' = :make OR 1 = 1",
                parameters={"make": "Toyota"},
            ),
        )
    )

    assert [r.id for r in records] == own


@pytest.mark.asyncio
async def test_filter_still_respects_soft_delete(factory, tenant1, makes):
    store = factory.create(tenant_id=tenant1.tenant_id)
    ids = await _insert(store, makes)
    await store.soft_delete(ids[0])

    records = await store.list(
        ListRequest(
            type=Car.TYPE,
            filter=Filter(query="data->>'make' = :make", parameters={"make": "Toyota"}),
        )
    )

    assert [r.id for r in records] == [ids[2]]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["tenant_id", "Type", "INCLUDE_DELETED", "offset"])
async def test_filter_parameter_colliding_with_system_name_raises(factory, name):
    store = factory.create()

    with pytest.raises(MergeConflictError) as exc_info:
        await store.list(
            ListRequest(
                type=Car.TYPE,
                filter=Filter(query=f"data->>'make' = :{name}", parameters={name: "x"}),
            )
        )

    assert exc_info.value.names == (name,)


@pytest.mark.asyncio
async def test_paged_filter_parameter_colliding_with_page_size_raises(factory):
    with pytest.raises(MergeConflictError):
        await factory.create().list_paged(
            ListRequest(
                type=Car.TYPE,
                filter=Filter(query="1 = :page_size", parameters={"page_size": 1}),
            )
        )
