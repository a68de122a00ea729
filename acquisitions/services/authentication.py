"""Request authentication: token extraction, verification and user resolution."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from acquisitions.core.errors import AuthenticationError, InternalError, InvalidTokenError
from acquisitions.core.security import decode_access_token
from acquisitions.models.user import User
from acquisitions.schemas.auth import CurrentUser

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

logger = logging.getLogger(__name__)


def extract_token(cookie_token: str | None, bearer_token: str | None) -> str | None:
    """Cookie first, then the token from an `Authorization: Bearer` header. None if neither."""
    if cookie_token:
        return cookie_token
    if bearer_token and bearer_token.strip():
        return bearer_token.strip()
    return None


def authenticate(
    session: Session,
    settings: "Settings",
    cookie_token: str | None,
    bearer_token: str | None,
) -> CurrentUser:
    """
    Resolve the request's credentials to a live user.

    bearer_token is the credential part of the Authorization header, already
    stripped of its scheme. Raises AuthenticationError (401) when the token is
    missing or invalid, or its user no longer exists; InternalError (500) on any
    unexpected codec or store fault.
    """
    token = extract_token(cookie_token, bearer_token)
    if token is None:
        raise AuthenticationError("Access denied. No token provided.")

    try:
        claims = decode_access_token(token, settings)
    except InvalidTokenError as e:
        logger.info("Rejected token: %s", e.message)
        raise AuthenticationError("Access denied. Invalid token.") from e
    except Exception as e:
        logger.exception("Token verification failed unexpectedly")
        raise InternalError("Authentication error") from e

    try:
        user = session.get(User, claims.id)
    except Exception as e:
        logger.exception("Authentication lookup failed for user id=%s", claims.id)
        raise InternalError("Authentication error") from e

    # Tokens are not revoked on delete; the lookup is what rejects them.
    if user is None:
        logger.info("Token for missing user id=%s rejected", claims.id)
        raise AuthenticationError("Access denied. User not found.")

    return CurrentUser(id=user.id, email=user.email, name=user.name, role=user.role)
