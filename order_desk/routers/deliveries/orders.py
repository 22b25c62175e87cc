from typing import Annotated

from fastapi import APIRouter, Depends, Query

from order_desk.core.dependencies import get_ledger, get_logged_in_courier
from order_desk.core.exceptions import OrderDeskError
from order_desk.routers.errors import http_error
from order_desk.schemas.accounts import Principal
from order_desk.schemas.orders import OrderResponse, OrdersResponse
from order_desk.services.ledger import OrderLedger

router = APIRouter(prefix="/deliveries/orders", tags=["orders", "deliveries"])


@router.get("/")
async def get_assigned_orders(
    courier: Annotated[Principal, Depends(get_logged_in_courier)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
    active_only: Annotated[
        bool, Query(description="Leave out Delivered and Cancelled orders")
    ] = False,
) -> OrdersResponse:
    """
    Retrieve the orders assigned to the logged in delivery account, newest first.
    Args:
        courier (Principal): The logged in delivery account.
        ledger (OrderLedger): The order ledger.
        active_only (bool, optional): Whether to leave out finished orders (default is False).
    Returns:
        OrdersResponse: The assigned orders and their count.
    """
    orders = await ledger.find_by_assignee(courier.username, active_only=active_only)
    return OrdersResponse(items=orders, total=len(orders))


@router.post("/{order_id}/deliver")
async def deliver_order(
    order_id: int,
    courier: Annotated[Principal, Depends(get_logged_in_courier)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
) -> OrderResponse:
    """
    deliver_order marks an order assigned to the logged in delivery account as Delivered.
    Raises:
        HTTPException: If the order is not found or assigned to someone else.
    """
    try:
        order = await ledger.mark_delivered(courier, order_id)
    except OrderDeskError as e:
        raise http_error(e, "delivering order")
    return OrderResponse(message="Order delivered", order=order)
