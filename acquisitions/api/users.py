"""User CRUD endpoints. All require authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends

from acquisitions.api.deps import AppSettings, DbSession, UserId, get_current_user, require_self_or_admin
from acquisitions.schemas.auth import CurrentUser
from acquisitions.schemas.user import UpdateUserRequest, UserResponse, UsersListResponse
from acquisitions.services import users as users_service

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: DbSession,
) -> UsersListResponse:
    users = users_service.list_users(db)
    return UsersListResponse(
        message="Successfully retrieved users",
        users=users,
        count=len(users),
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: UserId,
    _current_user: Annotated[CurrentUser, Depends(require_self_or_admin)],
    db: DbSession,
) -> UserResponse:
    """Fetch one user (self or admin)."""
    user = users_service.get_user(db, user_id)
    return UserResponse(message="Successfully retrieved user", user=user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UserId,
    body: UpdateUserRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: DbSession,
    settings: AppSettings,
) -> UserResponse:
    """
    Update name, email, password or role.
    Non-admins may update only themselves and never the role.
    """
    user = users_service.update_user(db, settings, user_id, body, current_user)
    return UserResponse(message="User updated successfully", user=user)


@router.delete("/{user_id}", response_model=UserResponse)
def delete_user(
    user_id: UserId,
    current_user: Annotated[CurrentUser, Depends(require_self_or_admin)],
    db: DbSession,
) -> UserResponse:
    """Delete a user (self or admin); returns the deleted record."""
    user = users_service.delete_user(db, user_id, current_user)
    return UserResponse(message="User deleted successfully", user=user)
