import pytest

from order_desk.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidTransitionError,
    OrderDeskError,
    OrderNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from order_desk.routers.errors import http_error


@pytest.mark.parametrize(
    "error, status_code",
    [
        (ValidationError("Quantity must be at least 1"), 422),
        (DuplicateUsernameError("Username 'alice' is taken"), 409),
        (InvalidCredentialsError("Invalid credentials or role mismatch"), 401),
        (PermissionDeniedError("Only a vendor can assign orders"), 403),
        (OrderNotFoundError(7), 404),
        (InvalidTransitionError("Order is finished"), 409),
        (OrderDeskError("Something else"), 400),
    ],
)
def test_http_error_status_codes(error: OrderDeskError, status_code: int):
    exception = http_error(error, "testing")
    assert exception.status_code == status_code
    assert exception.detail == str(error)
