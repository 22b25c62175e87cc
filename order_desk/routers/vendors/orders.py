from typing import Annotated

from fastapi import APIRouter, Depends, Form

from order_desk.core.config import request_logger
from order_desk.core.dependencies import (
    get_directory,
    get_ledger,
    get_logged_in_vendor,
)
from order_desk.core.enums import Role
from order_desk.core.exceptions import OrderDeskError
from order_desk.routers.errors import http_error
from order_desk.schemas.accounts import AccountPublic, Principal
from order_desk.schemas.orders import (
    AssignmentData,
    CouriersResponse,
    OrderResponse,
    OrdersResponse,
)
from order_desk.services.directory import IdentityDirectory
from order_desk.services.ledger import OrderLedger

router = APIRouter(prefix="/vendors/orders", tags=["orders", "vendors"])


@router.get("/")
async def get_all_orders(
    vendor: Annotated[Principal, Depends(get_logged_in_vendor)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
) -> OrdersResponse:
    """
    get_all_orders lists every order, newest first.
    Args:
        vendor (Principal): The logged in vendor.
        ledger (OrderLedger): The order ledger.
    Returns:
        OrdersResponse: All orders and their count.
    """
    orders = await ledger.find_all()
    return OrdersResponse(items=orders, total=len(orders))


@router.get("/couriers")
async def get_couriers(
    vendor: Annotated[Principal, Depends(get_logged_in_vendor)],
    directory: Annotated[IdentityDirectory, Depends(get_directory)],
) -> CouriersResponse:
    """
    get_couriers lists the delivery accounts an order can be assigned to.
    """
    couriers = [
        AccountPublic.model_validate(account.model_dump(exclude={"password"}))
        for account in await directory.list_by_role(Role.DELIVERY)
    ]
    return CouriersResponse(items=couriers, total=len(couriers))


@router.post("/{order_id}/assign")
async def assign_order(
    order_id: int,
    data: Annotated[AssignmentData, Form()],
    vendor: Annotated[Principal, Depends(get_logged_in_vendor)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
) -> OrderResponse:
    """
    assign_order assigns an order to a delivery account.
    Args:
        order_id (int): The ID of the order to assign.
        data (AssignmentData): The delivery username.
        vendor (Principal): The logged in vendor.
        ledger (OrderLedger): The order ledger.
    Returns:
        OrderResponse: The assigned order.
    Raises:
        HTTPException: If the order is not found or the username is not a delivery account.
    """
    try:
        order = await ledger.assign(vendor, order_id, data.delivery_username)
    except OrderDeskError as e:
        raise http_error(e, "assigning order")
    request_logger.info(f"Order {order.id} assigned to {order.assigned_to!r}")
    return OrderResponse(message="Order assigned", order=order)


@router.post("/{order_id}/advance")
async def advance_order(
    order_id: int,
    vendor: Annotated[Principal, Depends(get_logged_in_vendor)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
) -> OrderResponse:
    """
    advance_order moves an order to its next status.
    Args:
        order_id (int): The ID of the order to advance.
        vendor (Principal): The logged in vendor.
        ledger (OrderLedger): The order ledger.
    Returns:
        OrderResponse: The updated order.
    """
    try:
        order = await ledger.advance_status(vendor, order_id)
    except OrderDeskError as e:
        raise http_error(e, "advancing order")
    return OrderResponse(message=f"Order is now {order.status.value}", order=order)
