from typing import Annotated

from fastapi import APIRouter, Depends, Form, status

from order_desk.core.config import request_logger
from order_desk.core.dependencies import get_ledger, get_logged_in_customer
from order_desk.core.exceptions import OrderDeskError
from order_desk.routers.errors import http_error
from order_desk.schemas.accounts import Principal
from order_desk.schemas.orders import OrderCreate, OrderResponse, OrdersResponse
from order_desk.services.ledger import OrderLedger

router = APIRouter(prefix="/customers/orders", tags=["orders", "customers"])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def place_order(
    data: Annotated[OrderCreate, Form()],
    customer: Annotated[Principal, Depends(get_logged_in_customer)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
) -> OrderResponse:
    """
    place_order creates a Pending order for the logged in customer.
    Args:
        data (OrderCreate): The quantity and delivery address.
        customer (Principal): The logged in customer.
        ledger (OrderLedger): The order ledger.
    Returns:
        OrderResponse: The created order.
    Raises:
        HTTPException: If the order data is invalid.
    """
    try:
        order = await ledger.create(customer, data.quantity, data.address)
    except OrderDeskError as e:
        raise http_error(e, "placing order")
    request_logger.info(f"Order {order.id} placed by {customer.username!r}")
    return OrderResponse(message="Order placed successfully", order=order)


@router.get("/")
async def get_my_orders(
    customer: Annotated[Principal, Depends(get_logged_in_customer)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
) -> OrdersResponse:
    """
    get_my_orders lists the logged in customer's orders, newest first.
    """
    orders = await ledger.find_by_customer(customer.username)
    return OrdersResponse(items=orders, total=len(orders))


@router.post("/{order_id}/cancel")
async def cancel_order(
    order_id: int,
    customer: Annotated[Principal, Depends(get_logged_in_customer)],
    ledger: Annotated[OrderLedger, Depends(get_ledger)],
) -> OrderResponse:
    """
    cancel_order cancels one of the customer's own orders while it is still Pending.
    Args:
        order_id (int): The ID of the order to cancel.
        customer (Principal): The logged in customer.
        ledger (OrderLedger): The order ledger.
    Returns:
        OrderResponse: The cancelled order.
    Raises:
        HTTPException: If the order is not found, not owned by the customer or no longer Pending.
    """
    try:
        order = await ledger.cancel(customer, order_id)
    except OrderDeskError as e:
        raise http_error(e, "cancelling order")
    return OrderResponse(message="Order cancelled", order=order)
