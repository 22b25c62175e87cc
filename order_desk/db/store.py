import asyncio
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from order_desk.core.config import db_logger
from order_desk.db.models import Blob

T = TypeVar("T")

# One writer at a time per process for read-modify-write of a collection
_sql_write_lock = asyncio.Lock()


class BlobStore(Protocol):
    """Key-value storage of whole serialized collections."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, blob: str | None) -> None: ...

    def transaction(self) -> AbstractAsyncContextManager["BlobStore"]: ...


class SQLBlobStore:
    """
    BlobStore backed by the ``blobs`` table.

    Every ``get``/``set`` must run inside ``transaction()``, which holds the
    process-wide write lock and commits on a clean exit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> str | None:
        blob = await Blob.get(self.session, key)
        return blob.value if blob else None

    async def set(self, key: str, blob: str | None) -> None:
        if blob is None:
            existing = await Blob.get(self.session, key)
            if existing:
                await existing.delete(self.session)
            return
        await Blob.put(self.session, key, blob)

    @asynccontextmanager
    async def transaction(self):
        async with _sql_write_lock:
            async with self.session.begin():
                yield self


class MemoryBlobStore:
    """BlobStore kept in a dict, for tests and embedding."""

    def __init__(self, blobs: dict[str, str] | None = None):
        self.blobs: dict[str, str] = dict(blobs or {})
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    async def set(self, key: str, blob: str | None) -> None:
        if blob is None:
            self.blobs.pop(key, None)
        else:
            self.blobs[key] = blob

    @asynccontextmanager
    async def transaction(self):
        async with self._lock:
            snapshot = dict(self.blobs)
            try:
                yield self
            except Exception:
                self.blobs = snapshot
                raise


async def load_document(
    store: BlobStore, key: str, adapter: TypeAdapter[T], default: T
) -> T:
    """
    Read and decode the JSON document stored under ``key``.

    A missing key yields ``default``. A blob that is not valid JSON, or does not
    match the adapter's type, also yields ``default``: the collection is treated
    as empty rather than failing the caller.
    """
    blob = await store.get(key)
    if blob is None:
        return default
    try:
        return adapter.validate_json(blob)
    except PydanticValidationError as e:
        db_logger.warning(
            f"Discarding unreadable blob under key {key!r}: {e.error_count()} error(s)"
        )
        return default


async def save_document(
    store: BlobStore, key: str, adapter: TypeAdapter[T], value: T
) -> None:
    """Encode ``value`` as JSON and store it under ``key``."""
    await store.set(key, adapter.dump_json(value).decode())
