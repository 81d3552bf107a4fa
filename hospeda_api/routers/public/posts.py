"""
Post endpoints.

GET /posts/{id} answers {"data": {"post": null}} rather than 403 when the
caller may not see the post.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hospeda_api.routers._common import get_actor, get_service_context, to_response
from hospeda_api.routers.crud import register_crud_routes
from hospeda_api.services import PostService, ServiceContext
from hospeda_api.services.permissions import Actor


def get_post_service(ctx: ServiceContext = Depends(get_service_context)) -> PostService:
    return PostService(ctx)


router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/news")
def news(
    request: Request,
    actor: Actor = Depends(get_actor),
    service: PostService = Depends(get_post_service),
) -> JSONResponse:
    return to_response(service.get_news(actor, dict(request.query_params)))


@router.get("/featured")
def featured(
    request: Request,
    actor: Actor = Depends(get_actor),
    service: PostService = Depends(get_post_service),
) -> JSONResponse:
    return to_response(service.get_featured(actor, dict(request.query_params)))


@router.get("/category/{category}")
def by_category(
    category: str,
    request: Request,
    actor: Actor = Depends(get_actor),
    service: PostService = Depends(get_post_service),
) -> JSONResponse:
    params = {**request.query_params, "category": category.upper()}
    return to_response(service.get_by_category(actor, params))


@router.post("/{entity_id}/like")
def like(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: PostService = Depends(get_post_service),
) -> JSONResponse:
    return to_response(service.like(actor, entity_id))


@router.delete("/{entity_id}/like")
def unlike(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: PostService = Depends(get_post_service),
) -> JSONResponse:
    return to_response(service.unlike(actor, entity_id))


@router.get("/{entity_id}/summary")
def summary(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: PostService = Depends(get_post_service),
) -> JSONResponse:
    return to_response(service.get_summary(actor, entity_id))


@router.get("/{entity_id}/stats")
def stats(
    entity_id: str,
    actor: Actor = Depends(get_actor),
    service: PostService = Depends(get_post_service),
) -> JSONResponse:
    return to_response(service.get_stats(actor, entity_id))

register_crud_routes(router, get_post_service)
