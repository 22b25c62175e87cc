from datetime import datetime, timezone
from typing import Callable

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from order_desk.core.config import db_logger
from order_desk.core.enums import OrderStatus, Role, TransitionPolicy
from order_desk.core.exceptions import (
    OrderNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from order_desk.db.store import BlobStore, load_document, save_document
from order_desk.schemas.accounts import Principal
from order_desk.schemas.orders import Order, OrderCreate
from order_desk.services import lifecycle
from order_desk.services.directory import IdentityDirectory

ORDERS = TypeAdapter(list[Order])


def newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda order: (order.created_at, order.id), reverse=True)


def require_role(principal: Principal, role: Role, action: str) -> None:
    if principal.role != role:
        db_logger.warning(
            f"{principal.role.value} {principal.username!r} is not allowed to {action}"
        )
        raise PermissionDeniedError(f"Only a {role.value} can {action}")


class OrderLedger:
    """
    Owns every Order and all of its status transitions.

    Each mutating operation takes the acting principal, checks its role, then
    reads the whole collection, replaces the order by id and writes the whole
    collection back inside a single store transaction.
    """

    def __init__(
        self,
        store: BlobStore,
        directory: IdentityDirectory,
        key: str = "orders",
        policy: TransitionPolicy = TransitionPolicy.PERMISSIVE,
    ):
        self.store = store
        self.directory = directory
        self.key = key
        self.policy = policy

    async def _load(self) -> list[Order]:
        return await load_document(self.store, self.key, ORDERS, [])

    async def _save(self, orders: list[Order]) -> None:
        await save_document(self.store, self.key, ORDERS, orders)

    async def _update(
        self, order_id: int, change: Callable[[Order], dict]
    ) -> Order:
        """
        Replace the order with ``order_id`` by a copy carrying the fields
        returned by ``change``, which may raise to abort the write.
        """
        async with self.store.transaction():
            orders = await self._load()
            for index, order in enumerate(orders):
                if order.id == order_id:
                    break
            else:
                db_logger.warning(f"Order not found with ID: {order_id}")
                raise OrderNotFoundError(order_id)

            updated = order.model_copy(update=change(order))
            orders[index] = updated
            await self._save(orders)

        db_logger.info(
            f"Order(id={order_id}) {order.status.value} -> {updated.status.value}"
        )
        return updated

    async def create(self, principal: Principal, quantity: int, address: str) -> Order:
        """
        Places a new Pending order for a customer.

        Args:
            principal (Principal): The customer placing the order.
            quantity (int): A positive number of items.
            address (str): The delivery address.

        Returns:
            Order: The created order.

        Raises:
            PermissionDeniedError: If the principal is not a customer.
            ValidationError: If the quantity or address is invalid.
        """
        require_role(principal, Role.CUSTOMER, "place orders")
        try:
            data = OrderCreate(quantity=quantity, address=address)
        except PydanticValidationError as e:
            messages = "; ".join(error["msg"] for error in e.errors())
            db_logger.warning(f"Invalid order from {principal.username!r}: {messages}")
            raise ValidationError(messages) from e

        async with self.store.transaction():
            orders = await self._load()
            order = Order(
                id=max((o.id for o in orders), default=0) + 1,
                customer_username=principal.username,
                customer_display_name=principal.display_name,
                quantity=data.quantity,
                address=data.address,
                status=OrderStatus.PENDING,
                assigned_to=None,
                created_at=datetime.now(timezone.utc),
            )
            orders.append(order)
            await self._save(orders)

        db_logger.info(f"Created Order(id={order.id}) for {principal.username!r}")
        return order

    async def get(self, order_id: int) -> Order:
        async with self.store.transaction():
            orders = await self._load()
        for order in orders:
            if order.id == order_id:
                return order
        raise OrderNotFoundError(order_id)

    async def find_all(self) -> list[Order]:
        async with self.store.transaction():
            return newest_first(await self._load())

    async def find_by_customer(self, username: str) -> list[Order]:
        orders = await self.find_all()
        return [order for order in orders if order.customer_username == username]

    async def find_by_assignee(
        self, username: str, active_only: bool = False
    ) -> list[Order]:
        """Orders assigned to a delivery account, optionally only the active ones."""
        orders = await self.find_all()
        return [
            order
            for order in orders
            if order.assigned_to == username
            and (not active_only or lifecycle.is_active(order.status))
        ]

    async def assign(
        self, principal: Principal, order_id: int, delivery_username: str
    ) -> Order:
        """
        Assigns an order to a delivery account and sets it to Assigned.

        Raises:
            PermissionDeniedError: If the principal is not a vendor.
            ValidationError: If ``delivery_username`` is not a delivery account.
            OrderNotFoundError: If no order has ``order_id``.
            InvalidTransitionError: Under the strict policy, if the order is finished.
        """
        require_role(principal, Role.VENDOR, "assign orders")
        # Accounts are never deleted, so the check holds for the whole write
        courier = await self.directory.get(delivery_username)
        if courier is None or courier.role != Role.DELIVERY:
            db_logger.warning(f"Not a delivery account: {delivery_username!r}")
            raise ValidationError(f"{delivery_username!r} is not a delivery account")

        def change(order: Order) -> dict:
            lifecycle.check_assign(order.status, self.policy)
            return {"assigned_to": courier.username, "status": OrderStatus.ASSIGNED}

        return await self._update(order_id, change)

    async def advance_status(self, principal: Principal, order_id: int) -> Order:
        require_role(principal, Role.VENDOR, "update order status")

        def change(order: Order) -> dict:
            lifecycle.check_advance(order.status, self.policy)
            return {"status": lifecycle.next_status(order.status)}

        return await self._update(order_id, change)

    async def cancel(self, principal: Principal, order_id: int) -> Order:
        """Cancels a Pending order on behalf of the customer who placed it."""
        require_role(principal, Role.CUSTOMER, "cancel orders")

        def change(order: Order) -> dict:
            if order.customer_username != principal.username:
                db_logger.warning(
                    f"{principal.username!r} tried to cancel Order(id={order.id})"
                )
                raise PermissionDeniedError("Only the ordering customer can cancel")
            lifecycle.check_cancel(order.status)
            return {"status": OrderStatus.CANCELLED}

        return await self._update(order_id, change)

    async def mark_delivered(self, principal: Principal, order_id: int) -> Order:
        require_role(principal, Role.DELIVERY, "deliver orders")

        def change(order: Order) -> dict:
            if order.assigned_to != principal.username:
                db_logger.warning(
                    f"{principal.username!r} is not assigned to Order(id={order.id})"
                )
                raise PermissionDeniedError("Order is not assigned to you")
            lifecycle.check_deliver(order.status, self.policy)
            return {"status": OrderStatus.DELIVERED}

        return await self._update(order_id, change)
