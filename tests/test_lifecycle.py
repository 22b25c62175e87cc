import pytest

from order_desk.core.enums import OrderStatus, TransitionPolicy
from order_desk.core.exceptions import InvalidTransitionError
from order_desk.services import lifecycle


@pytest.mark.parametrize(
    "current, expected",
    [
        (OrderStatus.PENDING, OrderStatus.ASSIGNED),
        (OrderStatus.ASSIGNED, OrderStatus.OUT_FOR_DELIVERY),
        (OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED),
        (OrderStatus.DELIVERED, OrderStatus.DELIVERED),
        (OrderStatus.CANCELLED, OrderStatus.ASSIGNED),
    ],
)
def test_next_status(current: OrderStatus, expected: OrderStatus):
    assert lifecycle.next_status(current) is expected


def test_is_active():
    assert lifecycle.is_active(OrderStatus.PENDING)
    assert lifecycle.is_active(OrderStatus.OUT_FOR_DELIVERY)
    assert not lifecycle.is_active(OrderStatus.DELIVERED)
    assert not lifecycle.is_active(OrderStatus.CANCELLED)


def test_cancel_only_from_pending():
    lifecycle.check_cancel(OrderStatus.PENDING)
    for status in set(OrderStatus) - {OrderStatus.PENDING}:
        with pytest.raises(InvalidTransitionError):
            lifecycle.check_cancel(status)


def test_permissive_policy_never_raises():
    for status in OrderStatus:
        lifecycle.check_assign(status, TransitionPolicy.PERMISSIVE)
        lifecycle.check_advance(status, TransitionPolicy.PERMISSIVE)
        lifecycle.check_deliver(status, TransitionPolicy.PERMISSIVE)


def test_strict_policy():
    with pytest.raises(InvalidTransitionError):
        lifecycle.check_assign(OrderStatus.DELIVERED, TransitionPolicy.STRICT)
    with pytest.raises(InvalidTransitionError):
        lifecycle.check_assign(OrderStatus.CANCELLED, TransitionPolicy.STRICT)
    with pytest.raises(InvalidTransitionError):
        lifecycle.check_advance(OrderStatus.CANCELLED, TransitionPolicy.STRICT)
    with pytest.raises(InvalidTransitionError):
        lifecycle.check_deliver(OrderStatus.CANCELLED, TransitionPolicy.STRICT)

    lifecycle.check_assign(OrderStatus.OUT_FOR_DELIVERY, TransitionPolicy.STRICT)
    lifecycle.check_advance(OrderStatus.DELIVERED, TransitionPolicy.STRICT)
    lifecycle.check_deliver(OrderStatus.DELIVERED, TransitionPolicy.STRICT)
