"""Pydantic request/response schemas."""

from acquisitions.schemas.auth import (
    AuthResponse,
    CurrentUser,
    MessageResponse,
    SigninRequest,
    SignupRequest,
    TokenClaims,
)
from acquisitions.schemas.health import HealthResponse
from acquisitions.schemas.user import (
    Role,
    UpdateUserRequest,
    UserOut,
    UserResponse,
    UsersListResponse,
)

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "MessageResponse",
    "Role",
    "SigninRequest",
    "SignupRequest",
    "TokenClaims",
    "UpdateUserRequest",
    "UserOut",
    "UserResponse",
    "UsersListResponse",
]
