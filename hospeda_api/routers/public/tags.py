"""
Tag endpoints, including tag assignments.
"""

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from hospeda_api.routers._common import get_actor, get_service_context, to_response
from hospeda_api.routers.crud import register_crud_routes
from hospeda_api.services import ServiceContext, TagService
from hospeda_api.services.permissions import Actor


def get_tag_service(ctx: ServiceContext = Depends(get_service_context)) -> TagService:
    return TagService(ctx)


router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/popular")
def popular(
    limit: str | None = None,
    actor: Actor = Depends(get_actor),
    service: TagService = Depends(get_tag_service),
) -> JSONResponse:
    """Most used tags. Query: limit (default 10, max 100)."""
    return to_response(service.get_popular_tags(actor, limit))

@router.get("/entity/{entity_type}/{entity_id}")
def tags_for_entity(
    entity_type: str,
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: TagService = Depends(get_tag_service),
) -> JSONResponse:
    return to_response(service.get_tags_for_entity(actor, entity_id, entity_type.upper()))


@router.get("/{tag_id}/entities")
def entities_for_tag(
    tag_id: str,
    entity_type: str | None = None,
    actor: Actor = Depends(get_actor),
    service: TagService = Depends(get_tag_service),
) -> JSONResponse:
    entity_type = entity_type.upper() if entity_type else None
    return to_response(service.get_entities_by_tag(actor, tag_id, entity_type))


@router.post("/{tag_id}/assignments")
def assign(
    tag_id: str,
    entity_id: str = Body(...),
    entity_type: str = Body(...),
    actor: Actor = Depends(get_actor),
    service: TagService = Depends(get_tag_service),
) -> JSONResponse:
    """Body: {"entity_id": ..., "entity_type": "ACCOMMODATION"}."""
    output = service.add_tag_to_entity(actor, tag_id, entity_id, entity_type.upper())
    return to_response(output, status.HTTP_201_CREATED)


@router.delete("/{tag_id}/assignments/{entity_type}/{entity_id}")
def unassign(
    tag_id: str,
    entity_type: str,
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: TagService = Depends(get_tag_service),
) -> JSONResponse:
    return to_response(service.remove_tag_from_entity(actor, tag_id, entity_id, entity_type.upper()))


register_crud_routes(router, get_tag_service)
