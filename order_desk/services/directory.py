from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from order_desk.core.config import db_logger
from order_desk.core.enums import Role
from order_desk.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    ValidationError,
)
from order_desk.db.store import BlobStore, load_document, save_document
from order_desk.schemas.accounts import Account, AccountCreate

ACCOUNTS = TypeAdapter(list[Account])

DEMO_ACCOUNTS = (
    {"username": "alice", "password": "alice123", "role": Role.CUSTOMER, "display_name": "Alice"},
    {"username": "vendor", "password": "vendor123", "role": Role.VENDOR, "display_name": "ZAR Admin"},
    {"username": "baba", "password": "baba123", "role": Role.DELIVERY, "display_name": "Baba Delivery"},
)


class IdentityDirectory:
    """Registered accounts, persisted as one list under ``key``."""

    def __init__(self, store: BlobStore, key: str = "users"):
        self.store = store
        self.key = key

    async def _load(self) -> list[Account]:
        return await load_document(self.store, self.key, ACCOUNTS, [])

    async def register(
        self,
        username: str,
        password: str,
        role: Role | str,
        display_name: str = "",
    ) -> Account:
        """
        Registers a new account.

        Args:
            username (str): The unique, case-sensitive username.
            password (str): The password, stored as given.
            role (Role | str): One of customer, vendor or delivery.
            display_name (str, optional): Shown to other roles. Defaults to the username.

        Returns:
            Account: The stored account.

        Raises:
            ValidationError: If a required field is empty or the role is unknown.
            DuplicateUsernameError: If the username is already registered.
        """
        try:
            data = AccountCreate(
                username=username,
                password=password,
                role=role,
                display_name=display_name,
            )
        except PydanticValidationError as e:
            messages = "; ".join(error["msg"] for error in e.errors())
            db_logger.warning(f"Invalid registration for {username!r}: {messages}")
            raise ValidationError(messages) from e

        async with self.store.transaction():
            accounts = await self._load()
            if any(account.username == data.username for account in accounts):
                db_logger.warning(f"Username already exists: {data.username!r}")
                raise DuplicateUsernameError(
                    f"Username {data.username!r} already exists"
                )
            account = Account(**data.model_dump())
            accounts.append(account)
            await save_document(self.store, self.key, ACCOUNTS, accounts)

        db_logger.info(f"Registered {account.role.value} account {account.username!r}")
        return account

    async def authenticate(self, username: str, password: str, role: Role | str) -> Account:
        """
        Returns the account matching all three fields exactly.

        A wrong password and a role mismatch fail the same way.

        Raises:
            InvalidCredentialsError: If no account matches.
        """
        try:
            role = Role(role)
        except ValueError:
            role = None

        async with self.store.transaction():
            accounts = await self._load()

        for account in accounts:
            if (
                account.username == username
                and account.password == password
                and account.role == role
            ):
                db_logger.info(f"Authenticated {account.username!r}")
                return account

        db_logger.warning(f"Failed authentication for {username!r}")
        raise InvalidCredentialsError("Invalid credentials or role mismatch")

    async def get(self, username: str) -> Account | None:
        async with self.store.transaction():
            accounts = await self._load()
        return next((a for a in accounts if a.username == username), None)

    async def list_by_role(self, role: Role) -> list[Account]:
        async with self.store.transaction():
            accounts = await self._load()
        return [account for account in accounts if account.role == role]

    async def seed_demo_accounts(self) -> bool:
        """
        Stores the demo accounts when no account exists yet.

        Returns:
            bool: True if the accounts were created.
        """
        async with self.store.transaction():
            if await self._load():
                return False
            accounts = [Account(**data) for data in DEMO_ACCOUNTS]
            await save_document(self.store, self.key, ACCOUNTS, accounts)

        db_logger.info(
            "Demo accounts created: "
            + ", ".join(account.username for account in accounts)
        )
        return True
