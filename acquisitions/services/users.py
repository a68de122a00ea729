"""User record operations: list, fetch, update and delete with policy enforcement."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from acquisitions.core.errors import DuplicateEmailError, NotFoundError
from acquisitions.core.security import hash_password
from acquisitions.models.user import User
from acquisitions.schemas.auth import CurrentUser
from acquisitions.schemas.user import UpdateUserRequest, UserOut
from acquisitions.services.authorization import WARN_ADMIN_SELF_DELETE, Action, enforce

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

logger = logging.getLogger(__name__)


def _get_or_404(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        logger.info("User id=%s not found", user_id)
        raise NotFoundError("User not found")
    return user


def list_users(session: Session) -> list[UserOut]:
    users = session.query(User).order_by(User.id).all()
    return [UserOut.model_validate(u) for u in users]


def get_user(session: Session, user_id: int) -> UserOut:
    return UserOut.model_validate(_get_or_404(session, user_id))


def update_user(
    session: Session,
    settings: "Settings",
    user_id: int,
    body: UpdateUserRequest,
    identity: CurrentUser,
) -> UserOut:
    """
    Apply the supplied fields to user_id.

    Policy runs before the existence check, so a forbidden update on a missing id is
    403, not 404. An email collision fails atomically: nothing is written.
    """
    changes = body.changes()
    enforce(identity, Action.UPDATE, user_id, changes)
    user = _get_or_404(session, user_id)

    new_email = changes.get("email")
    if new_email is not None and new_email != user.email:
        taken = session.query(User).filter(User.email == new_email, User.id != user_id).first()
        if taken is not None:
            logger.warning("Update of user id=%s rejected, email taken: %s", user_id, new_email)
            raise DuplicateEmailError("Email already exists")

    if "name" in changes:
        user.name = changes["name"]
    if new_email is not None:
        user.email = new_email
    if "password" in changes:
        user.password_hash = hash_password(changes["password"], rounds=settings.BCRYPT_ROUNDS)
    if "role" in changes:
        user.role = changes["role"]
    user.updated_at = datetime.now(UTC)

    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning("Update of user id=%s lost email uniqueness race", user_id)
        raise DuplicateEmailError("Email already exists") from e
    session.refresh(user)

    logger.info(
        "User id=%s updated by user id=%s (fields=%s)",
        user_id,
        identity.id,
        ",".join(sorted(changes)),
    )
    return UserOut.model_validate(user)


def delete_user(session: Session, user_id: int, identity: CurrentUser) -> UserOut:
    """Delete user_id and return a sanitized snapshot of the removed record."""
    decision = enforce(identity, Action.DELETE, user_id)
    if decision.warning == WARN_ADMIN_SELF_DELETE:
        logger.warning("Admin user id=%s is deleting their own account", identity.id)

    user = _get_or_404(session, user_id)
    snapshot = UserOut.model_validate(user)
    session.delete(user)
    session.commit()

    logger.info("User id=%s deleted by user id=%s", user_id, identity.id)
    return snapshot
