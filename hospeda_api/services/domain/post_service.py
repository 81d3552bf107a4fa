"""
Post Service.

Blog posts and news. Unlike other entities, get_by_id does not fail when
the actor may not see the post: it returns {"post": None} so a front-end
can render the same "not available" page for missing and private posts.
The denial is still written to the permission audit trail.
"""

from __future__ import annotations

from typing import Any

from hospeda_api.models import Post, utcnow
from hospeda_api.repositories import PostRepository
from hospeda_api.schemas import (
    IdInput,
    PaginatedList,
    PostByCategoryInput,
    PostCreate,
    PostOutput,
    PostSearch,
    PostStats,
    PostSummary,
    PostUpdate,
    SearchParams,
)
from hospeda_api.services.base_service import BaseCRUDService
from hospeda_api.services.context import PermissionAuditRecord, ServiceContext
from hospeda_api.services.permissions import (
    Action,
    Actor,
    PermissionEnum,
    PermissionPolicy,
    policy_table,
)
from hospeda_api.services.result import ServiceOutput
from hospeda_shared.config.constants import LifecycleStatusEnum, VisibilityEnum
from hospeda_shared.utils.exceptions import ForbiddenError, UnauthorizedError

POST_POLICIES = policy_table(
    PermissionPolicy(Action.CREATE, PermissionEnum.POST_CREATE),
    PermissionPolicy(
        Action.UPDATE,
        PermissionEnum.POST_UPDATE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.POST_UPDATE_OWN,
    ),
    PermissionPolicy(
        Action.PATCH,
        PermissionEnum.POST_UPDATE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.POST_UPDATE_OWN,
    ),
    PermissionPolicy(
        Action.SOFT_DELETE,
        PermissionEnum.POST_DELETE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.POST_DELETE_OWN,
    ),
    PermissionPolicy(
        Action.RESTORE,
        PermissionEnum.POST_RESTORE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.POST_RESTORE_OWN,
    ),
    PermissionPolicy(Action.HARD_DELETE, PermissionEnum.POST_HARD_DELETE),
    PermissionPolicy(
        Action.VIEW,
        PermissionEnum.POST_VIEW_PRIVATE,
        allow_owner=True,
        allow_public_if_visibility=VisibilityEnum.PUBLIC,
    ),
    PermissionPolicy(Action.LIST, public=True),
    PermissionPolicy(Action.SEARCH, public=True),
    PermissionPolicy(Action.COUNT, public=True),
    PermissionPolicy(Action.PUBLISH, PermissionEnum.POST_PUBLISH),
    PermissionPolicy(Action.UPDATE_VISIBILITY, PermissionEnum.POST_VISIBILITY_CHANGE),
    PermissionPolicy(Action.SET_FEATURED, PermissionEnum.POST_FEATURED_TOGGLE),
    # Any signed-in actor
    PermissionPolicy(Action.LIKE),
)


class PostService(BaseCRUDService[Post, PostOutput]):
    """Service for posts and news."""

    owner_field = "author_id"
    view_all_permission = PermissionEnum.POST_VIEW_ALL

    def __init__(self, ctx: ServiceContext, repository: PostRepository | None = None):
        super().__init__(
            ctx,
            repository=repository or PostRepository(ctx.db),
            output_schema=PostOutput,
            create_schema=PostCreate,
            update_schema=PostUpdate,
            search_schema=PostSearch,
            entity_name="Post",
            policies=POST_POLICIES,
            search_fields=("title", "summary", "content"),
        )

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _before_create(self, values: dict[str, Any], actor: Actor) -> dict[str, Any]:
        if not values.get("author_id"):
            values["author_id"] = actor.id
        values["slug"] = self._unique_slug(values.get("slug") or values["title"])
        if values.get("lifecycle_state") == LifecycleStatusEnum.ACTIVE:
            values["published_at"] = utcnow()
        return values

    def _publish_values(self, entity: Post) -> dict[str, Any]:
        return {"published_at": utcnow()}

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_id(self, actor: Actor, entity_id: str) -> ServiceOutput[dict[str, PostOutput | None]]:
        """
        Get a post by id.

        Returns {"post": None} instead of an error when the actor may not
        view the post. Missing posts are still NOT_FOUND.
        """

        def execute(validated: IdInput, actor: Actor) -> dict[str, PostOutput | None]:
            post = self._load(validated.id)
            try:
                self._can_view(actor, post)
            except (ForbiddenError, UnauthorizedError) as err:
                self.ctx.logger.permission(PermissionAuditRecord.from_error(err, actor))
                return {"post": None}
            return {"post": self.to_output(post)}

        return self._run("get_by_id", {"id": entity_id}, IdInput, actor, execute)

    def get_news(self, actor: Actor, params: Any = None) -> ServiceOutput[PaginatedList[PostOutput]]:
        def execute(validated: SearchParams, actor: Actor):
            self._can_list(actor, None, validated)
            filters = self._scope_filters(actor, {})
            page = self._repo.find_news(filters, page=validated.page, page_size=validated.page_size)
            return self.to_page(page, validated)

        return self._run("get_news", params or {}, SearchParams, actor, execute)

    def get_featured(self, actor: Actor, params: Any = None) -> ServiceOutput[PaginatedList[PostOutput]]:
        def execute(validated: SearchParams, actor: Actor):
            self._can_list(actor, None, validated)
            filters = self._scope_filters(actor, {})
            page = self._repo.find_featured(filters, page=validated.page, page_size=validated.page_size)
            return self.to_page(page, validated)

        return self._run("get_featured", params or {}, SearchParams, actor, execute)

    def get_by_category(self, actor: Actor, params: Any) -> ServiceOutput[PaginatedList[PostOutput]]:
        def execute(validated: PostByCategoryInput, actor: Actor):
            self._can_list(actor, None, validated)
            filters = self._scope_filters(actor, {"category": validated.category})
            page = self._repo.find_all(
                filters,
                page=validated.page,
                page_size=validated.page_size,
                order_by="created_at",
                order="desc",
            )
            return self.to_page(page, validated)

        return self._run("get_by_category", params, PostByCategoryInput, actor, execute)

    def get_summary(self, actor: Actor, entity_id: str) -> ServiceOutput[PostSummary]:
        def execute(validated: IdInput, actor: Actor) -> PostSummary:
            post = self._load(validated.id)
            self._can_view(actor, post)
            return PostSummary.model_validate(post)

        return self._run("get_summary", {"id": entity_id}, IdInput, actor, execute)

    def get_stats(self, actor: Actor, entity_id: str) -> ServiceOutput[PostStats]:
        def execute(validated: IdInput, actor: Actor) -> PostStats:
            post = self._load(validated.id)
            self._can_view(actor, post)
            return PostStats(likes=post.likes or 0)

        return self._run("get_stats", {"id": entity_id}, IdInput, actor, execute)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def like(self, actor: Actor, entity_id: str) -> ServiceOutput[PostOutput]:
        """Add a like. The actor must be signed in and able to see the post."""

        def execute(validated: IdInput, actor: Actor) -> PostOutput:
            post = self._load(validated.id)
            self._authorize(Action.LIKE, actor, post)
            self._can_view(actor, post)
            return self.to_output(self._repo.increment_likes(post))

        return self._run("like", {"id": entity_id}, IdInput, actor, execute)

    def unlike(self, actor: Actor, entity_id: str) -> ServiceOutput[PostOutput]:
        """Remove a like. The count stops at zero."""

        def execute(validated: IdInput, actor: Actor) -> PostOutput:
            post = self._load(validated.id)
            self._authorize(Action.LIKE, actor, post)
            self._can_view(actor, post)
            return self.to_output(self._repo.decrement_likes(post))

        return self._run("unlike", {"id": entity_id}, IdInput, actor, execute)
