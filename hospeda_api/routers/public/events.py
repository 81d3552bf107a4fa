"""
Event endpoints.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hospeda_api.routers._common import get_actor, get_service_context, to_response
from hospeda_api.routers.crud import register_crud_routes
from hospeda_api.services import EventService, ServiceContext
from hospeda_api.services.permissions import Actor


def get_event_service(ctx: ServiceContext = Depends(get_service_context)) -> EventService:
    return EventService(ctx)


router = APIRouter(prefix="/events", tags=["events"])


@router.get("/upcoming")
def upcoming(
    request: Request,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> JSONResponse:
    """Events in the next days_ahead days (default 30). Query: category, city."""
    return to_response(service.get_upcoming(actor, dict(request.query_params)))


@router.get("/free")
def free(
    request: Request,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> JSONResponse:
    return to_response(service.get_free(actor, dict(request.query_params)))


@router.get("/author/{author_id}")
def by_author(
    author_id: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> JSONResponse:
    params = {**request.query_params, "author_id": author_id}
    return to_response(service.get_by_author(actor, params))


@router.get("/category/{category}")
def by_category(
    category: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> JSONResponse:
    params = {**request.query_params, "category": category.upper()}
    return to_response(service.get_by_category(actor, params))


@router.get("/location/{city}")
def by_location(
    city: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> JSONResponse:
    params = {**request.query_params, "city": city}
    return to_response(service.get_by_location(actor, params))

@router.get("/{entity_id}/summary")
def summary(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: EventService = Depends(get_event_service),
) -> JSONResponse:
    return to_response(service.get_summary(actor, entity_id))


register_crud_routes(router, get_event_service)
