"""
Declarative permission policies and the single dispatcher that evaluates them.

Each service declares a policy table: one PermissionPolicy per action.
Hook methods on the service dispatch through check_permission instead of
hand-writing a predicate per entity and action.

Usage:
    POLICIES = policy_table(
        PermissionPolicy(Action.CREATE, PermissionEnum.EVENT_CREATE),
        PermissionPolicy(
            Action.UPDATE,
            PermissionEnum.EVENT_UPDATE_ANY,
            allow_owner=True,
            owner_permission=PermissionEnum.EVENT_UPDATE_OWN,
        ),
        PermissionPolicy(Action.LIST, public=True),
    )

    check_permission(actor, Action.UPDATE, POLICIES.get(Action.UPDATE), event,
                     entity_name="Event", owner_field="author_id")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from hospeda_shared.config.constants import VisibilityEnum
from hospeda_shared.utils.exceptions import ForbiddenError, UnauthorizedError

from .actor import Actor, PermissionEnum


class Action(str, Enum):
    """Operation categories gated by a permission hook."""

    CREATE = "create"
    UPDATE = "update"
    PATCH = "patch"
    SOFT_DELETE = "soft_delete"
    HARD_DELETE = "hard_delete"
    RESTORE = "restore"
    VIEW = "view"
    LIST = "list"
    SEARCH = "search"
    COUNT = "count"
    PUBLISH = "publish"
    UPDATE_VISIBILITY = "update_visibility"
    SET_FEATURED = "set_featured"
    ASSIGN_TAG = "assign_tag"
    LIKE = "like"


@dataclass(frozen=True)
class PermissionPolicy:
    """
    Declarative form of one permission hook.

    Attributes:
        action: The gated action.
        required_permission: Token that grants the action on any entity.
            None means any authenticated actor.
        allow_owner: Owners (owner field or created_by_id) may act too.
        owner_permission: When set, owners also need this ".own" token.
        allow_public_if_visibility: Anyone, anonymous included, may act on
            entities with this visibility.
        public: No authentication needed at all.
    """

    action: Action
    required_permission: PermissionEnum | None = None
    allow_owner: bool = False
    owner_permission: PermissionEnum | None = None
    allow_public_if_visibility: VisibilityEnum | None = None
    public: bool = False


PolicyTable = Mapping[Action, PermissionPolicy]


def policy_table(*policies: PermissionPolicy) -> dict[Action, PermissionPolicy]:
    """Index policies by action."""
    return {policy.action: policy for policy in policies}


def is_owner(actor: Actor, entity: Any, owner_field: str | None = None) -> bool:
    """True if the actor owns or created the entity."""
    if actor.id is None or entity is None:
        return False
    candidates = {getattr(entity, "created_by_id", None)}
    if owner_field:
        candidates.add(getattr(entity, owner_field, None))
    candidates.discard(None)
    return actor.id in candidates


def check_permission(
    actor: Actor,
    action: Action,
    policy: PermissionPolicy | None,
    entity: Any = None,
    *,
    entity_name: str,
    owner_field: str | None = None,
) -> None:
    """
    Evaluate a policy for an actor. Returns None when allowed.

    Order of evaluation:
        1. Inactive actors are denied, admins included.
        2. ADMIN / SUPER_ADMIN are allowed.
        3. Public actions, or public-visibility targets, are allowed.
        4. Anonymous actors are denied with UNAUTHORIZED.
        5. The required permission, or ownership, allows.
        6. Everything else is FORBIDDEN.

    A missing policy makes the action admin-only.

    Raises:
        UnauthorizedError: Anonymous actor on a non-public action.
        ForbiddenError: Authenticated actor without permission, or disabled actor.
    """
    context = {
        "action": action.value,
        "permission": policy.required_permission.value
        if policy is not None and policy.required_permission is not None
        else None,
        "entity": entity_name,
        "entity_id": getattr(entity, "id", None),
    }
    denied = f"Permission denied: {entity_name} {action.value}"

    if not actor.is_active:
        raise ForbiddenError(f"{denied} (actor is disabled)", reason="actor_inactive", **context)

    if actor.is_admin:
        return

    if policy is None:
        raise ForbiddenError(denied, reason="admin_only", **context)

    if policy.public:
        return

    if (
        policy.allow_public_if_visibility is not None
        and entity is not None
        and getattr(entity, "visibility", None) == policy.allow_public_if_visibility
    ):
        return

    if actor.is_anonymous:
        raise UnauthorizedError(
            f"Authentication required: {entity_name} {action.value}",
            reason="anonymous",
            **context,
        )

    if policy.required_permission is None or actor.has_permission(policy.required_permission):
        return

    if policy.allow_owner and is_owner(actor, entity, owner_field):
        if policy.owner_permission is None or actor.has_permission(policy.owner_permission):
            return

    raise ForbiddenError(denied, reason="missing_permission", **context)


def can_view_all(actor: Actor, permission: PermissionEnum | None) -> bool:
    """Whether list/search results should include non-public rows."""
    if not actor.is_active:
        return False
    if actor.is_admin:
        return True
    return permission is not None and actor.has_permission(permission)
