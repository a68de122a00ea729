"""Authorization policy: pure allow/deny decisions over an identity, action and target.

Rules:
- READ_ALL / READ_ONE: any authenticated identity (routes add a self-or-admin gate
  for single-user reads).
- UPDATE: a role change needs admin; otherwise self or admin. The role check runs
  first, so a non-admin attempting both gets the role denial.
- DELETE: self or admin. An admin deleting their own account is allowed with a warning.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from acquisitions.core.errors import AuthorizationError
from acquisitions.schemas.auth import CurrentUser

DENY_ROLE_CHANGE = "Access denied. Only admins can change user roles."
DENY_UPDATE_OTHERS = "Access denied. You can only update your own information."
DENY_DELETE_OTHERS = "Access denied. You can only delete your own account."
DENY_ACCESS_OTHERS = "Access denied. You can only access your own resources."
WARN_ADMIN_SELF_DELETE = "admin_self_delete"


class Action(str, Enum):
    READ_ALL = "read_all"
    READ_ONE = "read_one"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy check. `warning` is set on allowed-but-notable actions."""

    allowed: bool
    reason: str | None = None
    warning: str | None = None


ALLOW = Decision(allowed=True)


def is_self_or_admin(identity: CurrentUser, target_user_id: int) -> bool:
    return identity.id == target_user_id or identity.is_admin


def decide(
    identity: CurrentUser,
    action: Action,
    target_user_id: int | None = None,
    payload: dict[str, Any] | None = None,
) -> Decision:
    """Return Allow/Deny for the identity performing action on target_user_id."""
    if action in (Action.READ_ALL, Action.READ_ONE):
        return ALLOW

    if target_user_id is None:
        raise ValueError(f"{action.value} requires a target user id")

    if action is Action.UPDATE:
        if payload and payload.get("role") is not None and not identity.is_admin:
            return Decision(allowed=False, reason=DENY_ROLE_CHANGE)
        if not is_self_or_admin(identity, target_user_id):
            return Decision(allowed=False, reason=DENY_UPDATE_OTHERS)
        return ALLOW

    if action is Action.DELETE:
        if not is_self_or_admin(identity, target_user_id):
            return Decision(allowed=False, reason=DENY_DELETE_OTHERS)
        if identity.is_admin and identity.id == target_user_id:
            return Decision(allowed=True, warning=WARN_ADMIN_SELF_DELETE)
        return ALLOW

    raise ValueError(f"Unknown action: {action!r}")


def enforce(
    identity: CurrentUser,
    action: Action,
    target_user_id: int | None = None,
    payload: dict[str, Any] | None = None,
) -> Decision:
    """Like decide(), but raises AuthorizationError on deny."""
    decision = decide(identity, action, target_user_id, payload)
    if not decision.allowed:
        raise AuthorizationError(decision.reason)
    return decision
