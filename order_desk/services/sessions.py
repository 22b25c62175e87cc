from pydantic import TypeAdapter

from order_desk.core.config import db_logger
from order_desk.db.store import BlobStore, load_document, save_document
from order_desk.schemas.accounts import Account, Principal

PRINCIPAL = TypeAdapter(Principal | None)


class SessionHolder:
    """The single process-wide session, persisted under ``key``."""

    def __init__(self, store: BlobStore, key: str = "session"):
        self.store = store
        self.key = key

    async def login(self, account: Account) -> Principal:
        """Replaces any existing session with one for ``account``."""
        principal = Principal.from_account(account)
        async with self.store.transaction():
            previous = await load_document(self.store, self.key, PRINCIPAL, None)
            await save_document(self.store, self.key, PRINCIPAL, principal)
        if previous and previous.username != principal.username:
            db_logger.info(
                f"Session for {previous.username!r} replaced by {principal.username!r}"
            )
        else:
            db_logger.info(f"Session started for {principal.username!r}")
        return principal

    async def logout(self) -> None:
        async with self.store.transaction():
            await self.store.set(self.key, None)
        db_logger.info("Session cleared")

    async def current(self) -> Principal | None:
        async with self.store.transaction():
            return await load_document(self.store, self.key, PRINCIPAL, None)
