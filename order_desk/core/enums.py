from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    DELIVERY = "delivery"


class OrderStatus(Enum):
    PENDING = "Pending"
    ASSIGNED = "Assigned"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class TransitionPolicy(Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"
