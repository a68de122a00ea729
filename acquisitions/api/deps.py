"""Shared route dependencies: settings, DB session, current user and self-or-admin gate."""

from typing import Annotated

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from acquisitions.core.config import Settings, get_settings
from acquisitions.core.database import get_db
from acquisitions.core.errors import AuthorizationError
from acquisitions.schemas.auth import CurrentUser
from acquisitions.schemas.user import USER_ID_MAX
from acquisitions.services.authentication import authenticate
from acquisitions.services.authorization import DENY_ACCESS_OTHERS, is_self_or_admin

security = HTTPBearer(auto_error=False)

DbSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
UserId = Annotated[int, Path(gt=0, le=USER_ID_MAX, description="User id")]


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: DbSession,
    settings: AppSettings,
) -> CurrentUser:
    """Dependency: authenticate via the token cookie or a Bearer header. Raises 401 otherwise."""
    return authenticate(
        db,
        settings,
        cookie_token=request.cookies.get(settings.AUTH_COOKIE_NAME),
        bearer_token=credentials.credentials if credentials is not None else None,
    )


def require_self_or_admin(
    user_id: UserId,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: allow only the target user or an admin. Raises 403 otherwise."""
    if not is_self_or_admin(current_user, user_id):
        raise AuthorizationError(DENY_ACCESS_OTHERS)
    return current_user
