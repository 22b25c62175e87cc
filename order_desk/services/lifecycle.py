"""
Order status lifecycle.

Nominal path: Pending -> Assigned -> Out for Delivery -> Delivered.
Side branch: Pending -> Cancelled.
"""

from order_desk.core.enums import OrderStatus, TransitionPolicy
from order_desk.core.exceptions import InvalidTransitionError

STATUS_SEQUENCE: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.ASSIGNED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def next_status(status: OrderStatus) -> OrderStatus:
    """
    Return the status one step further along STATUS_SEQUENCE.

    Delivered stays Delivered. A status outside the sequence (Cancelled)
    counts as the first step, so it moves on to Assigned.
    """
    try:
        index = STATUS_SEQUENCE.index(status)
    except ValueError:
        index = 0
    return STATUS_SEQUENCE[min(index + 1, len(STATUS_SEQUENCE) - 1)]


def is_active(status: OrderStatus) -> bool:
    return status not in TERMINAL_STATUSES


def check_assign(status: OrderStatus, policy: TransitionPolicy) -> None:
    if policy is TransitionPolicy.STRICT and status in TERMINAL_STATUSES:
        raise InvalidTransitionError(f"Cannot assign an order that is {status.value}")


def check_advance(status: OrderStatus, policy: TransitionPolicy) -> None:
    if policy is TransitionPolicy.STRICT and status is OrderStatus.CANCELLED:
        raise InvalidTransitionError("Cannot advance a cancelled order")


def check_deliver(status: OrderStatus, policy: TransitionPolicy) -> None:
    if policy is TransitionPolicy.STRICT and status is OrderStatus.CANCELLED:
        raise InvalidTransitionError("Cannot deliver a cancelled order")


def check_cancel(status: OrderStatus) -> None:
    # Cancelling is only ever allowed from Pending, whatever the policy
    if status is not OrderStatus.PENDING:
        raise InvalidTransitionError(
            f"Only pending orders can be cancelled, order is {status.value}"
        )
