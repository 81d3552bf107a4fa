"""
Accommodation endpoints.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hospeda_api.routers._common import get_actor, get_service_context, to_response
from hospeda_api.routers.crud import register_crud_routes
from hospeda_api.services import AccommodationService, ServiceContext
from hospeda_api.services.permissions import Actor


def get_accommodation_service(ctx: ServiceContext = Depends(get_service_context)) -> AccommodationService:
    return AccommodationService(ctx)


router = APIRouter(prefix="/accommodations", tags=["accommodations"])


@router.get("/top-rated")
def top_rated(
    request: Request,
    actor: Actor = Depends(get_actor),
    service: AccommodationService = Depends(get_accommodation_service),
) -> JSONResponse:
    """Best rated accommodations. Query: limit, destination_id."""
    return to_response(service.get_top_rated(actor, dict(request.query_params)))


@router.get("/destination/{destination_id}")
def by_destination(
    destination_id: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: AccommodationService = Depends(get_accommodation_service),
) -> JSONResponse:
    params = {**request.query_params, "destination_id": destination_id}
    return to_response(service.get_by_destination(actor, params))


@router.get("/type/{accommodation_type}")
def by_type(
    accommodation_type: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: AccommodationService = Depends(get_accommodation_service),
) -> JSONResponse:
    params = {**request.query_params, "type": accommodation_type.upper()}
    return to_response(service.get_by_type(actor, params))


@router.get("/{entity_id}/summary")
def summary(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: AccommodationService = Depends(get_accommodation_service),
) -> JSONResponse:
    return to_response(service.get_summary(actor, entity_id))


@router.get("/{entity_id}/similar")
def similar(
    entity_id: str,
    limit: str | None = None,
    actor: Actor = Depends(get_actor),
    service: AccommodationService = Depends(get_accommodation_service),
) -> JSONResponse:
    return to_response(service.get_similar(actor, entity_id, limit))

register_crud_routes(router, get_accommodation_service)
