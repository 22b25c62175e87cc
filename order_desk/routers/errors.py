from fastapi import HTTPException, status

from order_desk.core.config import request_logger
from order_desk.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidTransitionError,
    OrderDeskError,
    OrderNotFoundError,
    PermissionDeniedError,
    ValidationError,
)

STATUS_CODES: dict[type[OrderDeskError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_CONTENT,
    DuplicateUsernameError: status.HTTP_409_CONFLICT,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    OrderNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
}


def http_error(error: OrderDeskError, action: str) -> HTTPException:
    """
    http_error converts a domain error into the HTTPException returned to the client.

    Args:
        error (OrderDeskError): The error raised by a service.
        action (str): What was being attempted, for the log line.

    Returns:
        HTTPException: The exception to raise.
    """
    status_code = next(
        (code for kind, code in STATUS_CODES.items() if isinstance(error, kind)),
        status.HTTP_400_BAD_REQUEST,
    )
    request_logger.warning(f"Error {action}: {str(error)} ({status_code})")
    return HTTPException(status_code=status_code, detail=str(error))
