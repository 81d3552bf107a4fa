"""
Generic CRUD routes shared by every entity router.

Routes are thin: they build the actor, hand the raw body or query string
to the service and map the envelope to a response. All validation happens
in the service so the error envelope is identical for HTTP and in-process
callers.

Usage:
    router = APIRouter(prefix="/events", tags=["events"])

    @router.get("/upcoming")
    def upcoming(...): ...

    register_crud_routes(router, get_event_service)

Entity-specific routes must be declared before register_crud_routes so
that literal paths such as /upcoming win over /{entity_id}.
"""

from typing import Any, Callable

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from hospeda_api.routers._common import get_actor, to_response
from hospeda_api.services import BaseCRUDService
from hospeda_api.services.permissions import Actor


def register_crud_routes(
    router: APIRouter,
    get_service: Callable[..., BaseCRUDService],
) -> APIRouter:
    """Add list/search/count/get/create/update/patch/delete/restore/publish/admin-info routes."""

    @router.get("")
    def list_entities(
        request: Request,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        """Paginated list. Query: page, page_size, order_by, order, filters."""
        return to_response(service.list(actor, dict(request.query_params)))

    @router.get("/search")
    def search_entities(
        request: Request,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        """Free-text search on q plus the list filters."""
        return to_response(service.search(actor, dict(request.query_params)))

    @router.get("/count")
    def count_entities(
        request: Request,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.count(actor, dict(request.query_params)))

    @router.get("/slug/{slug}")
    def get_by_slug(
        slug: str,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.get_by_slug(actor, slug))

    @router.get("/{entity_id}")
    def get_entity(
        entity_id: str,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.get_by_id(actor, entity_id))

    @router.post("")
    def create_entity(
        body: dict[str, Any] = Body(...),
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.create(actor, body), status.HTTP_201_CREATED)

    @router.put("/{entity_id}")
    def update_entity(
        entity_id: str,
        body: dict[str, Any] = Body(...),
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.update(actor, entity_id, body))

    @router.patch("/{entity_id}")
    def patch_entity(
        entity_id: str,
        body: dict[str, Any] = Body(...),
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.patch(actor, entity_id, body))

    @router.delete("/{entity_id}")
    def soft_delete_entity(
        entity_id: str,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        """Soft delete. Deleting twice is a 400."""
        return to_response(service.soft_delete(actor, entity_id))

    @router.delete("/{entity_id}/hard")
    def hard_delete_entity(
        entity_id: str,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.hard_delete(actor, entity_id))

    @router.post("/{entity_id}/restore")
    def restore_entity(
        entity_id: str,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.restore(actor, entity_id))

    @router.post("/{entity_id}/publish")
    def publish_entity(
        entity_id: str,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.publish(actor, entity_id))

    @router.patch("/{entity_id}/visibility")
    def update_visibility(
        entity_id: str,
        visibility: str = Body(..., embed=True),
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.update_visibility(actor, entity_id, visibility))

    @router.patch("/{entity_id}/featured")
    def set_featured(
        entity_id: str,
        is_featured: bool = Body(..., embed=True),
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.set_featured_status(actor, entity_id, is_featured))

    @router.get("/{entity_id}/admin-info")
    def get_admin_info(
        entity_id: str,
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        return to_response(service.get_admin_info(actor, entity_id))

    @router.put("/{entity_id}/admin-info")
    def set_admin_info(
        entity_id: str,
        body: dict[str, Any] = Body(...),
        actor: Actor = Depends(get_actor),
        service: BaseCRUDService = Depends(get_service),
    ) -> JSONResponse:
        """Body: {"notes": ..., "favorite": false}."""
        return to_response(service.set_admin_info(actor, entity_id, body))

    return router
