"""
Base Service Classes.

Provides the generic CRUD service every entity service extends:
- Repository for data access (services never query the session directly)
- Permission hooks dispatched through a declarative policy table
- Every public method wrapped by run_with_logging_and_validation
- A ServiceOutput envelope returned from every public method

Architecture:
    Router (thin) → Service (permissions, validation, logging) → Repository → Model

Usage:
    from hospeda_api.services.base_service import BaseCRUDService

    class DestinationService(BaseCRUDService[Destination, DestinationOutput]):
        def __init__(self, ctx: ServiceContext, repository: DestinationRepository | None = None):
            super().__init__(
                ctx,
                repository=repository or DestinationRepository(ctx.db),
                output_schema=DestinationOutput,
                create_schema=DestinationCreate,
                update_schema=DestinationUpdate,
                search_schema=DestinationSearch,
                entity_name="Destination",
                policies=DESTINATION_POLICIES,
                search_fields=("name", "summary", "city"),
            )

    output = DestinationService(ctx).get_by_id(actor, destination_id)
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from pydantic import BaseModel

from hospeda_api.models import Base, new_id
from hospeda_api.repositories import BaseRepository
from hospeda_api.schemas import (
    AdminInfoInput,
    AdminInfoOutput,
    CountOutput,
    FeaturedInput,
    FieldLookupInput,
    IdInput,
    PaginatedList,
    SearchParams,
    VisibilityInput,
)
from hospeda_shared.config.constants import (
    LifecycleStatusEnum,
    NO_VALID_UPDATE_FIELDS_MESSAGE,
    VisibilityEnum,
)
from hospeda_shared.utils.exceptions import NotFoundError, ValidationError
from hospeda_shared.utils.validators import slugify

from .context import ServiceContext
from .execution import run_with_logging_and_validation
from .permissions import (
    Action,
    Actor,
    PermissionEnum,
    PolicyTable,
    can_view_all,
    check_permission,
)
from .result import ServiceOutput
from .validation import INVALID_ENUM, field_issue

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)

# Never writable through update/patch
SYSTEM_FIELDS = frozenset({
    "id",
    "created_at",
    "updated_at",
    "created_by_id",
    "updated_by_id",
    "deleted_at",
    "deleted_by_id",
})


def _with_id(entity_id: Any, data: Any) -> Any:
    """Merge a path id into an update payload for logging and validation."""
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    if isinstance(data, Mapping):
        return {**data, "id": entity_id}
    return data


class BaseService(ABC):
    """
    Abstract base service.

    Holds the service context and runs operations inside the logging and
    validation wrapper.
    """

    def __init__(self, ctx: ServiceContext, entity_name: str):
        self._ctx = ctx
        self._entity_name = entity_name

    @property
    def ctx(self) -> ServiceContext:
        return self._ctx

    @property
    def entity_name(self) -> str:
        return self._entity_name

    def _run(
        self,
        method_name: str,
        input: Any,
        schema: type[BaseModel] | None,
        actor: Actor,
        execute: Callable[[Any, Actor], Any],
    ) -> ServiceOutput:
        return run_with_logging_and_validation(
            self._ctx,
            method_name=method_name,
            input=input,
            schema=schema,
            actor=actor,
            execute=execute,
            entity_name=self._entity_name,
        )


class BaseCRUDService(BaseService, Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Public methods take the actor first and return a ServiceOutput.
    Subclasses customize behaviour by overriding:
    - permission hooks (_can_create, _can_view, ...), which default to the
      policy table
    - lifecycle hooks (_before_create, _after_update, ...), which default
      to no-ops
    """

    # Ownership column checked by owner-aware policies
    owner_field: str | None = None
    # Grants non-public rows in list/search/count
    view_all_permission: PermissionEnum | None = None

    def __init__(
        self,
        ctx: ServiceContext,
        *,
        repository: BaseRepository[ModelT],
        output_schema: type[OutputT],
        create_schema: type[BaseModel],
        update_schema: type[BaseModel],
        search_schema: type[SearchParams] = SearchParams,
        entity_name: str,
        policies: PolicyTable,
        search_fields: Sequence[str] = ("name",),
    ):
        super().__init__(ctx, entity_name)
        self._repo = repository
        self._output_schema = output_schema
        self._create_schema = create_schema
        self._update_schema = update_schema
        self._search_schema = search_schema
        self._policies = policies
        self._search_fields = tuple(search_fields)

    @property
    def repo(self) -> BaseRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    @property
    def policies(self) -> PolicyTable:
        return self._policies

    # =========================================================================
    # Output
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """Convert entity to output DTO."""
        return self._output_schema.model_validate(entity)

    def to_page(self, page: Any, params: SearchParams) -> PaginatedList[OutputT]:
        return PaginatedList[self._output_schema](
            items=[self.to_output(entity) for entity in page.items],
            total=page.total,
            page=params.page,
            page_size=params.page_size,
        )

    # =========================================================================
    # Permission Hooks
    # =========================================================================

    def _authorize(self, action: Action, actor: Actor, entity: ModelT | None = None) -> None:
        """Dispatch an action through the policy table."""
        check_permission(
            actor,
            action,
            self._policies.get(action),
            entity,
            entity_name=self._entity_name,
            owner_field=self.owner_field,
        )

    def _can_create(self, actor: Actor, entity: ModelT | None, data: Any) -> None:
        self._authorize(Action.CREATE, actor, entity)

    def _can_update(self, actor: Actor, entity: ModelT, data: Any) -> None:
        self._authorize(Action.UPDATE, actor, entity)

    def _can_patch(self, actor: Actor, entity: ModelT, data: Any) -> None:
        self._authorize(Action.PATCH, actor, entity)

    def _can_soft_delete(self, actor: Actor, entity: ModelT, data: Any = None) -> None:
        self._authorize(Action.SOFT_DELETE, actor, entity)

    def _can_hard_delete(self, actor: Actor, entity: ModelT, data: Any = None) -> None:
        self._authorize(Action.HARD_DELETE, actor, entity)

    def _can_restore(self, actor: Actor, entity: ModelT, data: Any = None) -> None:
        self._authorize(Action.RESTORE, actor, entity)

    def _can_view(self, actor: Actor, entity: ModelT, data: Any = None) -> None:
        self._authorize(Action.VIEW, actor, entity)

    def _can_list(self, actor: Actor, entity: ModelT | None = None, data: Any = None) -> None:
        self._authorize(Action.LIST, actor)

    def _can_search(self, actor: Actor, entity: ModelT | None = None, data: Any = None) -> None:
        self._authorize(Action.SEARCH, actor)

    def _can_count(self, actor: Actor, entity: ModelT | None = None, data: Any = None) -> None:
        self._authorize(Action.COUNT, actor)

    def _can_publish(self, actor: Actor, entity: ModelT, data: Any = None) -> None:
        self._authorize(Action.PUBLISH, actor, entity)

    def _can_update_visibility(self, actor: Actor, entity: ModelT, data: Any = None) -> None:
        self._authorize(Action.UPDATE_VISIBILITY, actor, entity)

    def _can_set_featured(self, actor: Actor, entity: ModelT, data: Any = None) -> None:
        self._authorize(Action.SET_FEATURED, actor, entity)

    # =========================================================================
    # Lifecycle Hooks (override in subclasses)
    # =========================================================================

    def _before_create(self, values: dict[str, Any], actor: Actor) -> dict[str, Any]:
        """Adjust values before insert. Raise ServiceError to abort."""
        return values

    def _after_create(self, entity: ModelT, actor: Actor) -> None:
        pass

    def _before_update(
        self,
        values: dict[str, Any],
        entity: ModelT,
        actor: Actor,
    ) -> dict[str, Any]:
        """Adjust values before update. Raise ServiceError to abort."""
        return values

    def _after_update(
        self,
        entity: ModelT,
        actor: Actor,
        previous: Mapping[str, Any],
    ) -> None:
        """previous holds the stored values of the updated fields."""

    def _after_soft_delete(self, entity: ModelT, actor: Actor) -> None:
        pass

    def _after_restore(self, entity: ModelT, actor: Actor) -> None:
        pass

    def _after_hard_delete(self, entity: ModelT, actor: Actor) -> None:
        pass

    # =========================================================================
    # Helpers
    # =========================================================================

    def _load(self, entity_id: str, *, include_deleted: bool = False) -> ModelT:
        """
        Load an entity or raise NotFoundError.

        Soft-deleted entities are only found with include_deleted=True.
        """
        entity = self._repo.find_by_id(entity_id, include_deleted=include_deleted)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def _check_order_by(self, params: SearchParams) -> None:
        if params.order_by and not self._repo.has_column(params.order_by):
            raise ValidationError(
                f"Cannot order {self._entity_name} by '{params.order_by}'",
                details=[field_issue("order_by", INVALID_ENUM, "unknown_column")],
            )

    def _scope_filters(self, actor: Actor, filters: dict[str, Any]) -> dict[str, Any]:
        """
        Restrict list/search/count to public rows for actors without the
        entity's viewAll permission.
        """
        if self._repo.has_column("visibility") and not can_view_all(actor, self.view_all_permission):
            filters = {**filters, "visibility": VisibilityEnum.PUBLIC}
        return filters

    def _unique_slug(self, *parts: Any, exclude_id: str | None = None) -> str:
        """Slug from parts, suffixed -2, -3, ... until unused."""
        base = slugify(*(str(part) for part in parts if part)) or new_id()[:8]
        candidate = base
        suffix = 2
        while self._repo.exists_by("slug", candidate, exclude_id=exclude_id):
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    @staticmethod
    def _strip_system_fields(values: Mapping[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in values.items() if key not in SYSTEM_FIELDS}

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, actor: Actor, data: Any) -> ServiceOutput[OutputT]:
        """
        Create an entity.

        Validates against the create schema, checks _can_create, stamps
        created_by_id/updated_by_id with the actor id.
        """

        def execute(validated: BaseModel, actor: Actor) -> OutputT:
            self._can_create(actor, None, validated)
            values = self._strip_system_fields(validated.model_dump())
            values = self._before_create(values, actor)
            entity = self._repo.create(values, user_id=actor.id)
            self._after_create(entity, actor)
            return self.to_output(entity)

        return self._run("create", data, self._create_schema, actor, execute)

    def update(self, actor: Actor, entity_id: str, data: Any) -> ServiceOutput[OutputT]:
        """Update an entity with the fields provided."""
        return self._update("update", Action.UPDATE, actor, entity_id, data)

    def patch(self, actor: Actor, entity_id: str, data: Any) -> ServiceOutput[OutputT]:
        """Partially update an entity. Gated by _can_patch."""
        return self._update("patch", Action.PATCH, actor, entity_id, data)

    def _update(
        self,
        method_name: str,
        action: Action,
        actor: Actor,
        entity_id: str,
        data: Any,
    ) -> ServiceOutput[OutputT]:
        hook = self._can_patch if action == Action.PATCH else self._can_update

        def execute(validated: BaseModel, actor: Actor) -> OutputT:
            values = self._strip_system_fields(validated.model_dump(exclude_unset=True))
            if not values:
                raise ValidationError(NO_VALID_UPDATE_FIELDS_MESSAGE)
            entity = self._load(entity_id)
            hook(actor, entity, validated)
            values = self._before_update(values, entity, actor)
            previous = {name: getattr(entity, name, None) for name in values}
            entity = self._repo.update(entity, values, user_id=actor.id)
            self._after_update(entity, actor, previous)
            return self.to_output(entity)

        return self._run(method_name, _with_id(entity_id, data), self._update_schema, actor, execute)

    def soft_delete(self, actor: Actor, entity_id: str) -> ServiceOutput[CountOutput]:
        """
        Soft delete an entity.

        Not idempotent: deleting an already deleted entity is a
        VALIDATION_ERROR, not a silent success.
        """

        def execute(validated: IdInput, actor: Actor) -> CountOutput:
            entity = self._load(validated.id, include_deleted=True)
            if entity.is_deleted:
                raise ValidationError(
                    f"{self._entity_name} is already deleted.",
                    entity_id=validated.id,
                )
            self._can_soft_delete(actor, entity)
            count = self._repo.soft_delete(entity, user_id=actor.id)
            self._after_soft_delete(entity, actor)
            return CountOutput(count=count)

        return self._run("soft_delete", {"id": entity_id}, IdInput, actor, execute)

    def restore(self, actor: Actor, entity_id: str) -> ServiceOutput[CountOutput]:
        """
        Restore a soft-deleted entity.

        Idempotent: restoring an entity that is not deleted returns
        count=0 without touching the repository.
        """

        def execute(validated: IdInput, actor: Actor) -> CountOutput:
            entity = self._load(validated.id, include_deleted=True)
            self._can_restore(actor, entity)
            if not entity.is_deleted:
                return CountOutput(count=0)
            count = self._repo.restore(entity, user_id=actor.id)
            self._after_restore(entity, actor)
            return CountOutput(count=count)

        return self._run("restore", {"id": entity_id}, IdInput, actor, execute)

    def hard_delete(self, actor: Actor, entity_id: str) -> ServiceOutput[CountOutput]:
        """Permanently delete an entity, deleted or not."""

        def execute(validated: IdInput, actor: Actor) -> CountOutput:
            entity = self._load(validated.id, include_deleted=True)
            self._can_hard_delete(actor, entity)
            count = self._repo.hard_delete(entity)
            self._after_hard_delete(entity, actor)
            return CountOutput(count=count)

        return self._run("hard_delete", {"id": entity_id}, IdInput, actor, execute)

    def publish(self, actor: Actor, entity_id: str) -> ServiceOutput[OutputT]:
        """Move a DRAFT entity to ACTIVE."""

        def execute(validated: IdInput, actor: Actor) -> OutputT:
            entity = self._load(validated.id)
            self._can_publish(actor, entity)
            if entity.lifecycle_state != LifecycleStatusEnum.DRAFT:
                raise ValidationError(
                    f"{self._entity_name} is not a draft.",
                    lifecycle_state=entity.lifecycle_state.value,
                )
            values = {"lifecycle_state": LifecycleStatusEnum.ACTIVE, **self._publish_values(entity)}
            entity = self._repo.update(entity, values, user_id=actor.id)
            return self.to_output(entity)

        return self._run("publish", {"id": entity_id}, IdInput, actor, execute)

    def _publish_values(self, entity: ModelT) -> dict[str, Any]:
        """Extra fields written when publishing."""
        return {}

    def update_visibility(
        self,
        actor: Actor,
        entity_id: str,
        visibility: VisibilityEnum | str,
    ) -> ServiceOutput[OutputT]:
        def execute(validated: VisibilityInput, actor: Actor) -> OutputT:
            self._require_column("visibility")
            entity = self._load(validated.id)
            self._can_update_visibility(actor, entity, validated)
            entity = self._repo.update(entity, {"visibility": validated.visibility}, user_id=actor.id)
            return self.to_output(entity)

        return self._run(
            "update_visibility",
            {"id": entity_id, "visibility": visibility},
            VisibilityInput,
            actor,
            execute,
        )

    def set_featured_status(
        self,
        actor: Actor,
        entity_id: str,
        is_featured: bool,
    ) -> ServiceOutput[OutputT]:
        def execute(validated: FeaturedInput, actor: Actor) -> OutputT:
            self._require_column("is_featured")
            entity = self._load(validated.id)
            self._can_set_featured(actor, entity, validated)
            entity = self._repo.update(entity, {"is_featured": validated.is_featured}, user_id=actor.id)
            return self.to_output(entity)

        return self._run(
            "set_featured_status",
            {"id": entity_id, "is_featured": is_featured},
            FeaturedInput,
            actor,
            execute,
        )

    def get_admin_info(self, actor: Actor, entity_id: str) -> ServiceOutput[AdminInfoOutput]:
        """Staff notes of an entity. Gated by _can_update."""

        def execute(validated: IdInput, actor: Actor) -> AdminInfoOutput:
            self._require_column("admin_info")
            entity = self._load(validated.id)
            self._can_update(actor, entity, validated)
            return AdminInfoOutput(admin_info=entity.admin_info)

        return self._run("get_admin_info", {"id": entity_id}, IdInput, actor, execute)

    def set_admin_info(
        self,
        actor: Actor,
        entity_id: str,
        admin_info: Any,
    ) -> ServiceOutput[AdminInfoOutput]:
        """Replace the staff notes of an entity. Gated by _can_update."""

        def execute(validated: AdminInfoInput, actor: Actor) -> AdminInfoOutput:
            self._require_column("admin_info")
            entity = self._load(validated.id)
            self._can_update(actor, entity, validated)
            entity = self._repo.update(
                entity,
                {"admin_info": validated.admin_info.model_dump()},
                user_id=actor.id,
            )
            return AdminInfoOutput(admin_info=entity.admin_info)

        return self._run(
            "set_admin_info",
            {"id": entity_id, "admin_info": admin_info},
            AdminInfoInput,
            actor,
            execute,
        )

    def _require_column(self, name: str) -> None:
        if not self._repo.has_column(name):
            raise ValidationError(f"{self._entity_name} does not support '{name}'")

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_id(self, actor: Actor, entity_id: str) -> ServiceOutput[OutputT]:
        """Get a live entity by id. Soft-deleted entities are NOT_FOUND."""

        def execute(validated: IdInput, actor: Actor) -> OutputT:
            entity = self._load(validated.id)
            self._can_view(actor, entity)
            return self.to_output(entity)

        return self._run("get_by_id", {"id": entity_id}, IdInput, actor, execute)

    def get_by_field(self, actor: Actor, field: str, value: Any) -> ServiceOutput[OutputT]:
        """Get a live entity by a unique column such as slug or name."""

        def execute(validated: FieldLookupInput, actor: Actor) -> OutputT:
            if not self._repo.has_column(validated.field):
                raise ValidationError(
                    f"Unknown field '{validated.field}'",
                    details=[field_issue("field", INVALID_ENUM, "unknown_column")],
                )
            entity = self._repo.find_one({validated.field: validated.value})
            if entity is None:
                raise NotFoundError(self._entity_name, validated.value)
            self._can_view(actor, entity)
            return self.to_output(entity)

        return self._run(
            "get_by_field",
            {"field": field, "value": value},
            FieldLookupInput,
            actor,
            execute,
        )

    def get_by_slug(self, actor: Actor, slug: str) -> ServiceOutput[OutputT]:
        return self.get_by_field(actor, "slug", slug)

    def get_by_name(self, actor: Actor, name: str) -> ServiceOutput[OutputT]:
        return self.get_by_field(actor, "name", name)

    def list(self, actor: Actor, params: Any = None) -> ServiceOutput[PaginatedList[OutputT]]:
        """Paginated list with equality filters; q is ignored."""

        def execute(validated: SearchParams, actor: Actor) -> PaginatedList[OutputT]:
            self._can_list(actor, None, validated)
            self._check_order_by(validated)
            filters = self._scope_filters(actor, validated.filters())
            page = self._repo.find_all(
                filters,
                page=validated.page,
                page_size=validated.page_size,
                order_by=validated.order_by,
                order=validated.order,
            )
            return self.to_page(page, validated)

        return self._run("list", params or {}, self._search_schema, actor, execute)

    def search(self, actor: Actor, params: Any = None) -> ServiceOutput[PaginatedList[OutputT]]:
        """Paginated list plus case-insensitive free-text match of q."""

        def execute(validated: SearchParams, actor: Actor) -> PaginatedList[OutputT]:
            self._can_search(actor, None, validated)
            self._check_order_by(validated)
            filters = self._scope_filters(actor, validated.filters())
            page = self._repo.search(
                validated.q,
                self._search_fields,
                filters,
                page=validated.page,
                page_size=validated.page_size,
                order_by=validated.order_by,
                order=validated.order,
            )
            return self.to_page(page, validated)

        return self._run("search", params or {}, self._search_schema, actor, execute)

    def count(self, actor: Actor, params: Any = None) -> ServiceOutput[CountOutput]:
        """Count matching entities; honours filters and q."""

        def execute(validated: SearchParams, actor: Actor) -> CountOutput:
            self._can_count(actor, None, validated)
            filters = self._scope_filters(actor, validated.filters())
            total = self._repo.count(filters, q=validated.q, fields=self._search_fields)
            return CountOutput(count=total)

        return self._run("count", params or {}, self._search_schema, actor, execute)
