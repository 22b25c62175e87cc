from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from order_desk.core.enums import Role
from order_desk.core.validators import validate_password, validate_required


class AccountBase(BaseModel):
    username: Annotated[
        str, Field(..., title="Username", description="Unique, case-sensitive")
    ]
    role: Annotated[Role, Field(..., title="Role", description="Role of the account")]
    display_name: Annotated[
        str,
        Field(
            title="Display name",
            description="Name shown to other roles, defaults to the username",
        ),
    ] = ""


class AccountCreate(AccountBase):
    password: Annotated[
        str,
        Field(
            ...,
            description="Password for the account, stored and compared as plain text.",
        ),
    ]
    model_config: ConfigDict = ConfigDict(extra="forbid")

    @field_validator("username")
    def username_validator(cls, value: str) -> str:
        """
        username_validator strips the username and rejects empty values.

        Args:
            value (str): The username to validate

        Returns:
            str: The validated username
        """
        return validate_required(value, "Username")

    @field_validator("password")
    def password_validator(cls, value: str) -> str:
        return validate_password(value)

    @model_validator(mode="after")
    def default_display_name(self) -> Self:
        self.display_name = self.display_name.strip() or self.username
        return self


class Account(AccountBase):
    """An account as stored in the users collection."""

    password: str


class AccountPublic(AccountBase):
    """An account without its password."""


class Principal(BaseModel):
    """The authenticated identity held by the session and passed to the ledger."""

    username: str
    role: Role
    display_name: str

    @classmethod
    def from_account(cls, account: Account) -> "Principal":
        return cls(
            username=account.username,
            role=account.role,
            display_name=account.display_name,
        )


class LoginDetails(BaseModel):
    username: str
    password: str
    role: Role
    model_config: ConfigDict = ConfigDict(extra="forbid")

    @field_validator("username")
    def username_validator(cls, value: str) -> str:
        return value.strip()


class Output(BaseModel):
    message: str
    principal: Principal


class MessageResponse(BaseModel):
    message: str
