"""Signup and signin: hash or verify credentials, persist, and mint a session token."""

import logging
from typing import TYPE_CHECKING, NamedTuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from acquisitions.core.errors import DuplicateEmailError, InvalidCredentialsError, NotFoundError
from acquisitions.core.security import create_access_token, hash_password, verify_password
from acquisitions.models.user import User
from acquisitions.schemas.auth import SigninRequest, SignupRequest, TokenClaims
from acquisitions.schemas.user import UserOut

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

logger = logging.getLogger(__name__)


class AuthResult(NamedTuple):
    user: UserOut
    token: str


def _issue_token(user: User, settings: "Settings") -> str:
    claims = TokenClaims(id=user.id, email=user.email, role=user.role)
    return create_access_token(claims, settings)


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.query(User).filter(User.email == email).first()


def signup(session: Session, settings: "Settings", body: SignupRequest) -> AuthResult:
    """
    Create a user and return it with a token for the new identity.

    The email pre-check is an optimization; the unique index is the guarantee, so
    a concurrent insert that wins the race still surfaces as DuplicateEmailError.
    """
    if get_user_by_email(session, body.email) is not None:
        logger.warning("Signup rejected, email already registered: %s", body.email)
        raise DuplicateEmailError("Email already exists")

    if body.role == "admin":
        # Signup trusts the caller-supplied role; flagged, not blocked.
        logger.warning("Signup with self-assigned admin role: %s", body.email)

    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
        role=body.role,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning("Signup lost email uniqueness race: %s", body.email)
        raise DuplicateEmailError("Email already exists") from e
    session.refresh(user)

    logger.info("User %s created (id=%s, role=%s)", user.email, user.id, user.role)
    return AuthResult(user=UserOut.model_validate(user), token=_issue_token(user, settings))


def signin(session: Session, settings: "Settings", body: SigninRequest) -> AuthResult:
    """Check credentials and return the user with a fresh token."""
    user = get_user_by_email(session, body.email)
    if user is None:
        logger.warning("Signin for unknown email: %s", body.email)
        raise NotFoundError("User not found")
    if not verify_password(body.password, user.password_hash):
        logger.warning("Signin with wrong password for user id=%s", user.id)
        raise InvalidCredentialsError("Invalid credentials")

    logger.info("User %s authenticated (id=%s)", user.email, user.id)
    return AuthResult(user=UserOut.model_validate(user), token=_issue_token(user, settings))
