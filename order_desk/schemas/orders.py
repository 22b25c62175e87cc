from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from order_desk.core.enums import OrderStatus
from order_desk.core.validators import validate_quantity, validate_required
from order_desk.schemas.accounts import AccountPublic


class Order(BaseModel):
    id: int
    customer_username: str
    customer_display_name: str
    quantity: Annotated[int, Field(gt=0)]
    address: Annotated[str, Field(min_length=1)]
    status: OrderStatus = OrderStatus.PENDING
    assigned_to: Annotated[
        str | None, Field(description="Username of the assigned delivery account")
    ] = None
    created_at: datetime


class OrderCreate(BaseModel):
    quantity: int
    address: str
    model_config: ConfigDict = ConfigDict(extra="forbid")

    @field_validator("quantity")
    def quantity_validator(cls, value: int) -> int:
        return validate_quantity(value)

    @field_validator("address")
    def address_validator(cls, value: str) -> str:
        return validate_required(value, "Address")


class AssignmentData(BaseModel):
    delivery_username: Annotated[
        str,
        Field(
            ...,
            title="Delivery username",
            description="Username of a registered delivery account",
        ),
    ]
    model_config: ConfigDict = ConfigDict(extra="forbid")

    @field_validator("delivery_username")
    def delivery_username_validator(cls, value: str) -> str:
        return validate_required(value, "Delivery username")


class OrderResponse(BaseModel):
    message: str
    order: Order


class OrdersResponse(BaseModel):
    items: list[Order]
    total: Annotated[int, Field(ge=0, description="The total number of items")]


class CouriersResponse(BaseModel):
    items: list[AccountPublic]
    total: Annotated[int, Field(ge=0, description="The total number of items")]
