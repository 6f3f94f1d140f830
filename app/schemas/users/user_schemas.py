import re
from datetime import datetime
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)


PASSWORD_MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_BYTES = 72

_email_adapter = TypeAdapter(EmailStr)


def check_password_strength(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    if not re.search(r"[A-Za-z]", value) or not re.search(r"\d", value):
        raise ValueError("password must contain a letter and a digit")
    return value


def check_email(value: str) -> str:
    """Validate the address but keep it exactly as sent; matching is case-sensitive."""
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("value is not a valid email address")
    return value


# =========================
# CREATE / UPDATE
# =========================
class UserCreateSchema(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        return check_email(value)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def password_policy(cls, value: str) -> str:
        return check_password_strength(value)


class UserUpdateSchema(BaseModel):
    """Closed set of fields a user may change on their own account."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    email: Optional[str] = None
    old_password: Optional[str] = Field(None, alias="oldPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def email_format(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return check_email(value)

    @field_validator("new_password")
    @classmethod
    def password_policy(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return check_password_strength(value)

    @model_validator(mode="after")
    def check_fields(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} must not be null")

        if ("old_password" in self.model_fields_set) != ("new_password" in self.model_fields_set):
            raise ValueError("oldPassword and newPassword must be sent together")

        return self


# =========================
# RESPONSE SCHEMAS
# =========================
class MessageResponse(BaseModel):
    message: str


class UserCreatedOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    created_at: datetime = Field(alias="createdAt")


class LogOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    message: str
    created_at: datetime = Field(alias="createdAt")


class UserLogsOut(BaseModel):
    total: int
    logs: List[LogOut]


class UpdateResultOut(BaseModel):
    message: str
    updated: List[str] = []
    rejected: dict = {}
