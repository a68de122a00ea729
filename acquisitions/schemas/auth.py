"""Request/response schemas for auth endpoints and token claims."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from acquisitions.schemas.user import USER_ID_MAX, Role, UserOut, normalize_email


class TokenClaims(BaseModel):
    """Identity claims carried inside a session token."""

    id: int = Field(..., gt=0, le=USER_ID_MAX)
    email: str
    role: Role


class CurrentUser(BaseModel):
    """Authenticated identity (id, email, name, role) attached to a request."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class SignupRequest(BaseModel):
    """Body for POST /auth/signup."""

    name: str = Field(..., min_length=2, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=6, max_length=128, description="Password")
    role: Literal["user", "admin"] = Field(default="user", description="Account role")

    @field_validator("name", mode="before")
    @classmethod
    def name_trim(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def email_normalize(cls, v: object) -> object:
        return normalize_email(v)


class SigninRequest(BaseModel):
    """Credentials for POST /auth/signin."""

    email: EmailStr
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def email_normalize(cls, v: object) -> object:
        return normalize_email(v)


class AuthResponse(BaseModel):
    """Response for signup/signin; the token itself travels in the cookie."""

    message: str
    user: UserOut


class MessageResponse(BaseModel):
    message: str
