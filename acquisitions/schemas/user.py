"""Request/response schemas for user endpoints."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

Role = Literal["user", "admin"]

# users.id is a 32-bit INTEGER on PostgreSQL; larger ids can never match a row.
USER_ID_MAX = 2**31 - 1

EMAIL_MAX_LEN = 255


def normalize_email(v: object) -> object:
    """Trim and lower-case an email before format validation; enforce max length."""
    if not isinstance(v, str):
        return v
    v = v.strip().lower()
    if len(v) > EMAIL_MAX_LEN:
        raise ValueError(f"email must be at most {EMAIL_MAX_LEN} characters")
    return v


class UserOut(BaseModel):
    """Sanitized user (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpdateUserRequest(BaseModel):
    """Body for PUT /users/{id}. All fields optional; at least one is required."""

    name: str | None = Field(default=None, min_length=2, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)
    role: Role | None = None

    @field_validator("name", mode="before")
    @classmethod
    def name_trim(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def email_normalize(cls, v: object) -> object:
        return normalize_email(v)

    @model_validator(mode="after")
    def at_least_one_field(self) -> "UpdateUserRequest":
        if not self.changes():
            raise ValueError("At least one field must be provided for update")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields the caller supplied with a non-null value."""
        return self.model_dump(exclude_none=True)


class UserResponse(BaseModel):
    message: str
    user: UserOut


class UsersListResponse(BaseModel):
    """Response for GET /users."""

    message: str
    users: list[UserOut]
    count: int
