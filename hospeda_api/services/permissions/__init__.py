"""
Actor model and declarative permission policies.

Usage:
    from hospeda_api.services.permissions import Actor, Action, check_permission

    actor = Actor.for_role("u-1", RoleEnum.HOST)
    check_permission(actor, Action.CREATE, policies.get(Action.CREATE),
                     entity_name="Accommodation")
"""

from .actor import (
    Actor,
    ActorState,
    RoleEnum,
    PermissionEnum,
    ADMIN_ROLES,
    DEFAULT_ROLE_PERMISSIONS,
)
from .policies import (
    Action,
    PermissionPolicy,
    PolicyTable,
    policy_table,
    check_permission,
    can_view_all,
    is_owner,
)

__all__ = [
    # Actor
    "Actor",
    "ActorState",
    "RoleEnum",
    "PermissionEnum",
    "ADMIN_ROLES",
    "DEFAULT_ROLE_PERMISSIONS",
    # Policies
    "Action",
    "PermissionPolicy",
    "PolicyTable",
    "policy_table",
    "check_permission",
    "can_view_all",
    "is_owner",
]
