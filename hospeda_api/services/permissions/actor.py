"""
Actor: the identity invoking a service operation.

Built fresh for every request from the request context and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterable


class RoleEnum(str, Enum):
    """Closed set of actor roles."""

    GUEST = "GUEST"
    USER = "USER"
    HOST = "HOST"
    EDITOR = "EDITOR"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class ActorState(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class PermissionEnum(str, Enum):
    """
    Permission tokens, one per entity + action.

    ".own" tokens only apply to entities the actor owns or created,
    ".any" tokens apply to every entity of the type.
    """

    # Accommodation
    ACCOMMODATION_CREATE = "accommodation.create"
    ACCOMMODATION_UPDATE_OWN = "accommodation.update.own"
    ACCOMMODATION_UPDATE_ANY = "accommodation.update.any"
    ACCOMMODATION_DELETE_OWN = "accommodation.delete.own"
    ACCOMMODATION_DELETE_ANY = "accommodation.delete.any"
    ACCOMMODATION_RESTORE_OWN = "accommodation.restore.own"
    ACCOMMODATION_RESTORE_ANY = "accommodation.restore.any"
    ACCOMMODATION_HARD_DELETE = "accommodation.hardDelete"
    ACCOMMODATION_VIEW_ALL = "accommodation.viewAll"
    ACCOMMODATION_VIEW_PRIVATE = "accommodation.view.private"
    ACCOMMODATION_PUBLISH = "accommodation.publish"
    ACCOMMODATION_VISIBILITY_CHANGE = "accommodation.visibility.change"
    ACCOMMODATION_FEATURED_TOGGLE = "accommodation.featured.toggle"

    # Destination
    DESTINATION_CREATE = "destination.create"
    DESTINATION_UPDATE = "destination.update"
    DESTINATION_DELETE = "destination.delete"
    DESTINATION_RESTORE = "destination.restore"
    DESTINATION_HARD_DELETE = "destination.hardDelete"
    DESTINATION_VIEW_ALL = "destination.viewAll"
    DESTINATION_VIEW_PRIVATE = "destination.view.private"
    DESTINATION_VISIBILITY_CHANGE = "destination.visibility.change"
    DESTINATION_FEATURED_TOGGLE = "destination.featured.toggle"

    # Event
    EVENT_CREATE = "event.create"
    EVENT_UPDATE_OWN = "event.update.own"
    EVENT_UPDATE_ANY = "event.update.any"
    EVENT_DELETE_OWN = "event.delete.own"
    EVENT_DELETE_ANY = "event.delete.any"
    EVENT_RESTORE_OWN = "event.restore.own"
    EVENT_RESTORE_ANY = "event.restore.any"
    EVENT_HARD_DELETE = "event.hardDelete"
    EVENT_VIEW_ALL = "event.viewAll"
    EVENT_VIEW_PRIVATE = "event.view.private"
    EVENT_PUBLISH = "event.publish"
    EVENT_VISIBILITY_CHANGE = "event.visibility.change"
    EVENT_FEATURED_TOGGLE = "event.featured.toggle"

    # Post
    POST_CREATE = "post.create"
    POST_UPDATE_OWN = "post.update.own"
    POST_UPDATE_ANY = "post.update.any"
    POST_DELETE_OWN = "post.delete.own"
    POST_DELETE_ANY = "post.delete.any"
    POST_RESTORE_OWN = "post.restore.own"
    POST_RESTORE_ANY = "post.restore.any"
    POST_HARD_DELETE = "post.hardDelete"
    POST_VIEW_ALL = "post.viewAll"
    POST_VIEW_PRIVATE = "post.view.private"
    POST_PUBLISH = "post.publish"
    POST_VISIBILITY_CHANGE = "post.visibility.change"
    POST_FEATURED_TOGGLE = "post.featured.toggle"

    # Tag
    TAG_CREATE = "tag.create"
    TAG_UPDATE = "tag.update"
    TAG_DELETE = "tag.delete"
    TAG_RESTORE = "tag.restore"
    TAG_HARD_DELETE = "tag.hardDelete"
    TAG_ASSIGN = "tag.assign"
    TAG_VIEW_ALL = "tag.viewAll"


# Roles that implicitly hold every permission
ADMIN_ROLES: Final[frozenset[RoleEnum]] = frozenset({RoleEnum.ADMIN, RoleEnum.SUPER_ADMIN})


# Grants used when a caller provides a role but no explicit permission list
DEFAULT_ROLE_PERMISSIONS: Final[dict[RoleEnum, frozenset[PermissionEnum]]] = {
    RoleEnum.GUEST: frozenset(),
    RoleEnum.USER: frozenset(),
    RoleEnum.HOST: frozenset({
        PermissionEnum.ACCOMMODATION_CREATE,
        PermissionEnum.ACCOMMODATION_UPDATE_OWN,
        PermissionEnum.ACCOMMODATION_DELETE_OWN,
        PermissionEnum.ACCOMMODATION_RESTORE_OWN,
        PermissionEnum.ACCOMMODATION_PUBLISH,
        PermissionEnum.ACCOMMODATION_VISIBILITY_CHANGE,
    }),
    RoleEnum.EDITOR: frozenset({
        PermissionEnum.EVENT_CREATE,
        PermissionEnum.EVENT_UPDATE_ANY,
        PermissionEnum.EVENT_DELETE_ANY,
        PermissionEnum.EVENT_RESTORE_ANY,
        PermissionEnum.EVENT_VIEW_ALL,
        PermissionEnum.EVENT_VIEW_PRIVATE,
        PermissionEnum.EVENT_PUBLISH,
        PermissionEnum.POST_CREATE,
        PermissionEnum.POST_UPDATE_ANY,
        PermissionEnum.POST_DELETE_ANY,
        PermissionEnum.POST_RESTORE_ANY,
        PermissionEnum.POST_VIEW_ALL,
        PermissionEnum.POST_VIEW_PRIVATE,
        PermissionEnum.POST_PUBLISH,
        PermissionEnum.TAG_CREATE,
        PermissionEnum.TAG_UPDATE,
        PermissionEnum.TAG_ASSIGN,
    }),
    RoleEnum.ADMIN: frozenset(),
    RoleEnum.SUPER_ADMIN: frozenset(),
}


@dataclass(frozen=True)
class Actor:
    """
    Caller identity + role + granted permissions.

    id is None for anonymous/public callers.
    """

    id: str | None
    role: RoleEnum
    permissions: frozenset[PermissionEnum] = field(default_factory=frozenset)
    state: ActorState = ActorState.ACTIVE

    @classmethod
    def guest(cls) -> "Actor":
        """Anonymous public caller."""
        return cls(id=None, role=RoleEnum.GUEST)

    @classmethod
    def system(cls) -> "Actor":
        """Internal caller for scripts and seeding."""
        return cls(id="00000000-0000-0000-0000-000000000000", role=RoleEnum.SUPER_ADMIN)

    @classmethod
    def for_role(
        cls,
        actor_id: str | None,
        role: RoleEnum,
        permissions: Iterable[PermissionEnum] | None = None,
        state: ActorState = ActorState.ACTIVE,
    ) -> "Actor":
        """Build an actor, falling back to the role's default grants."""
        if permissions is None:
            granted = DEFAULT_ROLE_PERMISSIONS.get(role, frozenset())
        else:
            granted = frozenset(permissions)
        return cls(id=actor_id, role=role, permissions=granted, state=state)

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    @property
    def is_active(self) -> bool:
        return self.state == ActorState.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    def has_permission(self, permission: PermissionEnum) -> bool:
        """ADMIN and SUPER_ADMIN hold every permission."""
        return self.is_admin or permission in self.permissions
