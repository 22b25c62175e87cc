import pytest
from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from order_desk.db.store import (
    MemoryBlobStore,
    SQLBlobStore,
    load_document,
    save_document,
)

NUMBERS = TypeAdapter(list[int])


@pytest.mark.anyio
async def test_sql_store_get_set(async_session: AsyncSession):
    store = SQLBlobStore(async_session)

    async with store.transaction():
        assert await store.get("orders") is None
        await store.set("orders", "[1, 2]")

    async with store.transaction():
        assert await store.get("orders") == "[1, 2]"
        await store.set("orders", "[3]")

    async with store.transaction():
        assert await store.get("orders") == "[3]"
        await store.set("orders", None)

    async with store.transaction():
        assert await store.get("orders") is None
        # Removing a missing key is a no-op
        await store.set("orders", None)


@pytest.mark.anyio
async def test_sql_store_rolls_back_on_error(async_session: AsyncSession):
    store = SQLBlobStore(async_session)
    async with store.transaction():
        await store.set("users", "[]")

    with pytest.raises(RuntimeError):
        async with store.transaction():
            await store.set("users", '["changed"]')
            raise RuntimeError("abort")

    async with store.transaction():
        assert await store.get("users") == "[]"


@pytest.mark.anyio
async def test_memory_store_rolls_back_on_error():
    store = MemoryBlobStore({"users": "[]"})

    with pytest.raises(RuntimeError):
        async with store.transaction():
            await store.set("users", '["changed"]')
            await store.set("session", "{}")
            raise RuntimeError("abort")

    assert store.blobs == {"users": "[]"}


@pytest.mark.anyio
async def test_documents_round_trip_and_fail_closed():
    store = MemoryBlobStore()

    async with store.transaction():
        assert await load_document(store, "numbers", NUMBERS, []) == []
        await save_document(store, "numbers", NUMBERS, [1, 2, 3])
        assert await load_document(store, "numbers", NUMBERS, []) == [1, 2, 3]

    for corrupt in ("", "not json", '{"a": 1}', '["x"]'):
        store.blobs["numbers"] = corrupt
        assert await load_document(store, "numbers", NUMBERS, []) == []
