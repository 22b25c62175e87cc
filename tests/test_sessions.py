import pytest

from order_desk.core.enums import Role
from order_desk.db.store import MemoryBlobStore
from order_desk.services.directory import IdentityDirectory
from order_desk.services.sessions import SessionHolder


@pytest.mark.anyio
async def test_no_session_by_default(holder: SessionHolder):
    assert await holder.current() is None


@pytest.mark.anyio
async def test_login_logout(directory: IdentityDirectory, holder: SessionHolder, store: MemoryBlobStore):
    account = await directory.register("alice", "alice123", Role.CUSTOMER, "Alice")

    principal = await holder.login(account)
    assert principal.username == "alice"
    assert principal.role is Role.CUSTOMER
    assert principal.display_name == "Alice"
    assert await holder.current() == principal
    assert "password" not in store.blobs["session"]

    await holder.logout()
    assert await holder.current() is None
    assert "session" not in store.blobs

    # Logging out again is harmless
    await holder.logout()


@pytest.mark.anyio
async def test_login_replaces_existing_session(directory: IdentityDirectory, holder: SessionHolder):
    alice = await directory.register("alice", "a", Role.CUSTOMER)
    vendor = await directory.register("vendor", "v", Role.VENDOR)

    await holder.login(alice)
    await holder.login(vendor)

    current = await holder.current()
    assert current.username == "vendor"
    assert current.role is Role.VENDOR


@pytest.mark.anyio
async def test_session_survives_new_holder(store: MemoryBlobStore, directory: IdentityDirectory):
    account = await directory.register("baba", "b", Role.DELIVERY)
    await SessionHolder(store).login(account)

    assert (await SessionHolder(store).current()).username == "baba"


@pytest.mark.anyio
async def test_corrupt_session_blob_reads_as_absent():
    holder = SessionHolder(MemoryBlobStore({"session": '{"username": 1}'}))
    assert await holder.current() is None
