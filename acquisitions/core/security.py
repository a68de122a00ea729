"""Password hashing and JWT creation/verification for authentication."""

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError

from acquisitions.core.errors import HashingError, InvalidTokenError
from acquisitions.schemas.auth import TokenClaims

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

logger = logging.getLogger(__name__)

# Default bcrypt cost (rounds) when the caller does not pass settings.BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")
    except (ValueError, TypeError, OSError) as e:
        logger.error("Password hashing failed: %s", type(e).__name__)
        raise HashingError("Error hashing password") from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.
    Returns False on mismatch; raises HashingError if the stored digest is malformed.
    """
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError) as e:
        logger.error("Password verification failed: %s", type(e).__name__)
        raise HashingError("Error comparing password") from e


def create_access_token(
    claims: TokenClaims,
    settings: "Settings",
    now: datetime | None = None,
) -> str:
    """Create a JWT access token with sub (user id), email, role, iat and exp."""
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(claims.id),
        "email": claims.email,
        "role": claims.role,
        "exp": expire,
        "iat": issued_at,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: "Settings") -> TokenClaims:
    """
    Verify signature and expiry, then validate the claim shape.
    Raises InvalidTokenError on any failure; an unverified payload is never returned.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Access denied. Token expired.") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError() from e

    try:
        return TokenClaims(
            id=int(payload["sub"]),
            email=payload.get("email"),
            role=payload.get("role"),
        )
    except (TypeError, ValueError, ValidationError) as e:
        raise InvalidTokenError("Access denied. Invalid token payload.") from e
