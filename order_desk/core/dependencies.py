from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from order_desk.core.config import get_settings, request_logger
from order_desk.core.enums import Role
from order_desk.db.config import get_async_session
from order_desk.db.store import BlobStore, SQLBlobStore
from order_desk.schemas.accounts import Principal
from order_desk.services.directory import IdentityDirectory
from order_desk.services.ledger import OrderLedger
from order_desk.services.sessions import SessionHolder


async def get_store(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> BlobStore:
    return SQLBlobStore(session)


async def get_directory(
    store: Annotated[BlobStore, Depends(get_store)],
) -> IdentityDirectory:
    return IdentityDirectory(store, key=get_settings().users_key)


async def get_session_holder(
    store: Annotated[BlobStore, Depends(get_store)],
) -> SessionHolder:
    return SessionHolder(store, key=get_settings().session_key)


async def get_ledger(
    store: Annotated[BlobStore, Depends(get_store)],
    directory: Annotated[IdentityDirectory, Depends(get_directory)],
) -> OrderLedger:
    settings = get_settings()
    return OrderLedger(
        store,
        directory,
        key=settings.orders_key,
        policy=settings.transition_policy,
    )


async def get_logged_in_principal(
    holder: Annotated[SessionHolder, Depends(get_session_holder)],
) -> Principal:
    """
    get_logged_in_principal retrieves the principal of the current session.

    Args:
        holder (SessionHolder): The session holder.

    Returns:
        Principal: The logged in principal.

    Raises:
        HTTPException: If nobody is logged in (401).
    """
    principal = await holder.current()
    if principal is None:
        request_logger.warning("No active session")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in"
        )
    return principal


def _require(principal: Principal, role: Role) -> Principal:
    if principal.role != role:
        request_logger.warning(f"{principal.username!r} is not a {role.value}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"User is not a {role.value}",
        )
    return principal


async def get_logged_in_customer(
    principal: Annotated[Principal, Depends(get_logged_in_principal)],
) -> Principal:
    """
    get_logged_in_customer retrieves the logged in customer.

    Raises:
        HTTPException: If the principal is not a customer (403).
    """
    return _require(principal, Role.CUSTOMER)


async def get_logged_in_vendor(
    principal: Annotated[Principal, Depends(get_logged_in_principal)],
) -> Principal:
    return _require(principal, Role.VENDOR)


async def get_logged_in_courier(
    principal: Annotated[Principal, Depends(get_logged_in_principal)],
) -> Principal:
    return _require(principal, Role.DELIVERY)
