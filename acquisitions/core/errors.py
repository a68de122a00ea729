"""Application error taxonomy. Handlers dispatch on ErrorKind, never on message text."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Error categories and the HTTP status each one maps to."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class AppError(Exception):
    """Base for known, named failures that map to a specific HTTP response."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InputValidationError(AppError):
    """Request body or params failed shape validation (field-level details)."""

    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"


class AuthenticationError(AppError):
    """Missing, invalid or expired token, or the token's user no longer exists."""

    kind = ErrorKind.AUTHENTICATION
    default_message = "Access denied. Authentication required."


class InvalidCredentialsError(AuthenticationError):
    """Signin password did not match the stored hash."""

    default_message = "Invalid credentials"


class InvalidTokenError(AuthenticationError):
    """Token signature, payload or expiry check failed."""

    default_message = "Access denied. Invalid token."


class AuthorizationError(AppError):
    kind = ErrorKind.AUTHORIZATION
    default_message = "Access denied."


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class DuplicateEmailError(AppError):
    kind = ErrorKind.CONFLICT
    default_message = "Email already exists"


class HashingError(AppError):
    """Password hashing or verification failed internally (e.g. malformed digest)."""

    kind = ErrorKind.INTERNAL
    default_message = "Error hashing password"


class InternalError(AppError):
    kind = ErrorKind.INTERNAL
