"""
FastAPI dependencies shared by all routers.

The actor is read from request headers. This is the seam where a real
authentication layer plugs in: replace get_actor and every route keeps
working unchanged.

Headers:
    X-Actor-Id:          actor id; absent means anonymous
    X-Actor-Role:        RoleEnum name (default USER for identified actors)
    X-Actor-Permissions: comma-separated permission tokens; absent means
                         the role's default grants
    X-Actor-State:       ACTIVE (default) or INACTIVE
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from hospeda_api.services import ServiceContext
from hospeda_api.services.permissions import Actor, ActorState, PermissionEnum, RoleEnum
from hospeda_api.services.validation import INVALID_ENUM, field_issue
from hospeda_shared.config.constants import Headers
from hospeda_shared.infrastructure.db import get_db
from hospeda_shared.utils.exceptions import ValidationError


def _parse_enum(enum_cls, raw: str, header: str):
    try:
        return enum_cls(raw.strip())
    except ValueError:
        raise ValidationError(
            f"Invalid {header} header",
            details=[field_issue(header, INVALID_ENUM, "enum")],
        ) from None


def get_actor(request: Request) -> Actor:
    """
    Build the calling actor from request headers.

    Raises:
        ValidationError: Unknown role, state or permission token.
    """
    actor_id = request.headers.get(Headers.ACTOR_ID, "").strip()
    if not actor_id:
        return Actor.guest()

    raw_role = request.headers.get(Headers.ACTOR_ROLE)
    role = _parse_enum(RoleEnum, raw_role.upper(), Headers.ACTOR_ROLE) if raw_role else RoleEnum.USER

    raw_state = request.headers.get(Headers.ACTOR_STATE)
    state = _parse_enum(ActorState, raw_state.upper(), Headers.ACTOR_STATE) if raw_state else ActorState.ACTIVE

    permissions = None
    raw_permissions = request.headers.get(Headers.ACTOR_PERMISSIONS)
    if raw_permissions is not None:
        permissions = [
            _parse_enum(PermissionEnum, token, Headers.ACTOR_PERMISSIONS)
            for token in raw_permissions.split(",")
            if token.strip()
        ]

    return Actor.for_role(actor_id, role, permissions, state)


def get_service_context(db: Session = Depends(get_db)) -> ServiceContext:
    """Per-request service context bound to the request's session."""
    return ServiceContext.from_session(db)
