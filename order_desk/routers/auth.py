from typing import Annotated

from fastapi import APIRouter, Depends, Form, status

from order_desk.core.config import request_logger
from order_desk.core.dependencies import (
    get_directory,
    get_logged_in_principal,
    get_session_holder,
)
from order_desk.core.exceptions import OrderDeskError
from order_desk.routers.errors import http_error
from order_desk.schemas.accounts import (
    AccountCreate,
    AccountPublic,
    LoginDetails,
    MessageResponse,
    Output,
    Principal,
)
from order_desk.services.directory import IdentityDirectory
from order_desk.services.sessions import SessionHolder


router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    data: Annotated[AccountCreate, Form()],
    directory: Annotated[IdentityDirectory, Depends(get_directory)],
) -> AccountPublic:
    """
    register registers a new account.

    Args:
        data (AccountCreate): The account data.
        directory (IdentityDirectory): The identity directory.

    Returns:
        AccountPublic: The created account, without its password.
    """
    try:
        account = await directory.register(**data.model_dump())
        return AccountPublic.model_validate(account.model_dump(exclude={"password"}))
    except OrderDeskError as e:
        raise http_error(e, f"registering {data.username!r}")


@router.post("/login", status_code=status.HTTP_200_OK)
async def login(
    data: Annotated[LoginDetails, Form()],
    directory: Annotated[IdentityDirectory, Depends(get_directory)],
    holder: Annotated[SessionHolder, Depends(get_session_holder)],
) -> Output:
    """
    login authenticates the account and makes it the current session.

    Args:
        data (LoginDetails): The username, password and role.
        directory (IdentityDirectory): The identity directory.
        holder (SessionHolder): The session holder.

    Returns:
        Output: The response message and the session principal.
    """
    try:
        account = await directory.authenticate(data.username, data.password, data.role)
    except OrderDeskError as e:
        raise http_error(e, f"logging in {data.username!r}")

    principal = await holder.login(account)
    request_logger.info(f"{principal.username!r} logged in as {principal.role.value}")
    return Output(message="Logged in", principal=principal)


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "description": "Successfully logged out",
            "content": {
                "application/json": {"example": {"message": "Successfully logged out"}}
            },
        }
    },
)
async def logout(
    holder: Annotated[SessionHolder, Depends(get_session_holder)],
) -> MessageResponse:
    """
    logout clears the current session. Logging out twice is not an error.
    """
    await holder.logout()
    return MessageResponse(message="Successfully logged out")


@router.get("/session")
async def current_session(
    principal: Annotated[Principal, Depends(get_logged_in_principal)],
) -> Principal:
    return principal
