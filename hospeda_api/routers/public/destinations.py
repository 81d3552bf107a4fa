"""
Destination endpoints.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hospeda_api.routers._common import get_actor, get_service_context, to_response
from hospeda_api.routers.crud import register_crud_routes
from hospeda_api.services import DestinationService, ServiceContext
from hospeda_api.services.permissions import Actor


def get_destination_service(ctx: ServiceContext = Depends(get_service_context)) -> DestinationService:
    return DestinationService(ctx)


router = APIRouter(prefix="/destinations", tags=["destinations"])


@router.get("/{entity_id}/accommodations")
def accommodations(
    entity_id: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: DestinationService = Depends(get_destination_service),
) -> JSONResponse:
    """Accommodations in the destination, best rated first."""
    params = {**request.query_params, "destination_id": entity_id}
    return to_response(service.get_accommodations(actor, params))


@router.get("/{entity_id}/summary")
def summary(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: DestinationService = Depends(get_destination_service),
) -> JSONResponse:
    return to_response(service.get_summary(actor, entity_id))


@router.get("/{entity_id}/stats")
def stats(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: DestinationService = Depends(get_destination_service),
) -> JSONResponse:
    return to_response(service.get_stats(actor, entity_id))


register_crud_routes(router, get_destination_service)
