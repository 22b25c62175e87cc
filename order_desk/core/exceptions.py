class OrderDeskError(Exception):
    """Base class for errors raised by the directory, session holder and ledger."""


class DuplicateUsernameError(OrderDeskError):
    pass


class InvalidCredentialsError(OrderDeskError):
    pass


class OrderNotFoundError(OrderDeskError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class ValidationError(OrderDeskError, ValueError):
    pass


class PermissionDeniedError(OrderDeskError):
    pass


class InvalidTransitionError(OrderDeskError):
    pass
