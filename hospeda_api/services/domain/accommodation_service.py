"""
Accommodation Service.
"""

from __future__ import annotations

from typing import Any, Mapping

from hospeda_api.models import Accommodation
from hospeda_api.repositories import AccommodationRepository, DestinationRepository
from hospeda_api.schemas import (
    AccommodationByDestinationInput,
    AccommodationByTypeInput,
    AccommodationCreate,
    AccommodationOutput,
    AccommodationSearch,
    AccommodationSummary,
    AccommodationUpdate,
    IdInput,
    PaginatedList,
    SimilarInput,
    TopRatedInput,
)
from hospeda_api.services.base_service import BaseCRUDService
from hospeda_api.services.context import ServiceContext
from hospeda_api.services.permissions import (
    Action,
    Actor,
    PermissionEnum,
    PermissionPolicy,
    policy_table,
)
from hospeda_api.services.result import ServiceOutput
from hospeda_api.services.validation import INVALID, field_issue
from hospeda_shared.config.constants import VisibilityEnum
from hospeda_shared.utils.exceptions import ValidationError

ACCOMMODATION_POLICIES = policy_table(
    PermissionPolicy(Action.CREATE, PermissionEnum.ACCOMMODATION_CREATE),
    PermissionPolicy(
        Action.UPDATE,
        PermissionEnum.ACCOMMODATION_UPDATE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.ACCOMMODATION_UPDATE_OWN,
    ),
    PermissionPolicy(
        Action.PATCH,
        PermissionEnum.ACCOMMODATION_UPDATE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.ACCOMMODATION_UPDATE_OWN,
    ),
    PermissionPolicy(
        Action.SOFT_DELETE,
        PermissionEnum.ACCOMMODATION_DELETE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.ACCOMMODATION_DELETE_OWN,
    ),
    PermissionPolicy(
        Action.RESTORE,
        PermissionEnum.ACCOMMODATION_RESTORE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.ACCOMMODATION_RESTORE_OWN,
    ),
    PermissionPolicy(Action.HARD_DELETE, PermissionEnum.ACCOMMODATION_HARD_DELETE),
    PermissionPolicy(
        Action.VIEW,
        PermissionEnum.ACCOMMODATION_VIEW_PRIVATE,
        allow_owner=True,
        allow_public_if_visibility=VisibilityEnum.PUBLIC,
    ),
    PermissionPolicy(Action.LIST, public=True),
    PermissionPolicy(Action.SEARCH, public=True),
    PermissionPolicy(Action.COUNT, public=True),
    PermissionPolicy(
        Action.PUBLISH,
        PermissionEnum.ACCOMMODATION_PUBLISH,
        allow_owner=True,
        owner_permission=PermissionEnum.ACCOMMODATION_UPDATE_OWN,
    ),
    PermissionPolicy(
        Action.UPDATE_VISIBILITY,
        PermissionEnum.ACCOMMODATION_VISIBILITY_CHANGE,
        allow_owner=True,
        owner_permission=PermissionEnum.ACCOMMODATION_UPDATE_OWN,
    ),
    PermissionPolicy(Action.SET_FEATURED, PermissionEnum.ACCOMMODATION_FEATURED_TOGGLE),
)


class AccommodationService(BaseCRUDService[Accommodation, AccommodationOutput]):
    """
    Service for accommodation listings.

    Hosts own their listings through owner_id. Creating an accommodation
    without an owner assigns it to the calling actor.
    """

    owner_field = "owner_id"
    view_all_permission = PermissionEnum.ACCOMMODATION_VIEW_ALL

    def __init__(
        self,
        ctx: ServiceContext,
        repository: AccommodationRepository | None = None,
        destinations: DestinationRepository | None = None,
    ):
        super().__init__(
            ctx,
            repository=repository or AccommodationRepository(ctx.db),
            output_schema=AccommodationOutput,
            create_schema=AccommodationCreate,
            update_schema=AccommodationUpdate,
            search_schema=AccommodationSearch,
            entity_name="Accommodation",
            policies=ACCOMMODATION_POLICIES,
            search_fields=("name", "summary", "description"),
        )
        self._destinations = destinations or DestinationRepository(ctx.db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_destination(
        self,
        actor: Actor,
        params: Any,
    ) -> ServiceOutput[PaginatedList[AccommodationOutput]]:
        """Accommodations in a destination, best rated first."""

        def execute(validated: AccommodationByDestinationInput, actor: Actor):
            self._can_list(actor, None, validated)
            filters = self._scope_filters(actor, {})
            page = self._repo.find_by_destination(
                validated.destination_id,
                filters,
                page=validated.page,
                page_size=validated.page_size,
            )
            return self.to_page(page, validated)

        return self._run("get_by_destination", params, AccommodationByDestinationInput, actor, execute)

    def get_by_type(
        self,
        actor: Actor,
        params: Any,
    ) -> ServiceOutput[PaginatedList[AccommodationOutput]]:
        def execute(validated: AccommodationByTypeInput, actor: Actor):
            self._can_list(actor, None, validated)
            filters = self._scope_filters(actor, {})
            page = self._repo.find_by_type(
                validated.type,
                filters,
                page=validated.page,
                page_size=validated.page_size,
            )
            return self.to_page(page, validated)

        return self._run("get_by_type", params, AccommodationByTypeInput, actor, execute)

    def get_top_rated(
        self,
        actor: Actor,
        params: Any = None,
    ) -> ServiceOutput[list[AccommodationSummary]]:
        def execute(validated: TopRatedInput, actor: Actor):
            self._can_list(actor, None, validated)
            filters: dict[str, Any] = {}
            if validated.destination_id:
                filters["destination_id"] = validated.destination_id
            filters = self._scope_filters(actor, filters)
            entities = self._repo.find_top_rated(validated.limit, filters)
            return [AccommodationSummary.model_validate(entity) for entity in entities]

        return self._run("get_top_rated", params or {}, TopRatedInput, actor, execute)

    def get_similar(
        self,
        actor: Actor,
        entity_id: str,
        limit: int | None = None,
    ) -> ServiceOutput[list[AccommodationSummary]]:
        """
        Best rated accommodations of the same type in the same destination.

        The accommodation itself is never part of the result.
        """

        def execute(validated: SimilarInput, actor: Actor):
            entity = self._load(validated.id)
            self._can_view(actor, entity)
            self._can_list(actor, None, validated)
            filters = self._scope_filters(actor, {})
            entities = self._repo.find_similar(entity, validated.limit, filters)
            return [AccommodationSummary.model_validate(similar) for similar in entities]

        params: dict[str, Any] = {"id": entity_id}
        if limit is not None:
            params["limit"] = limit
        return self._run("get_similar", params, SimilarInput, actor, execute)

    def get_summary(self, actor: Actor, entity_id: str) -> ServiceOutput[AccommodationSummary]:
        def execute(validated: IdInput, actor: Actor):
            entity = self._load(validated.id)
            self._can_view(actor, entity)
            return AccommodationSummary.model_validate(entity)

        return self._run("get_summary", {"id": entity_id}, IdInput, actor, execute)

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _before_create(self, values: dict[str, Any], actor: Actor) -> dict[str, Any]:
        self._check_destination(values.get("destination_id"))
        if not values.get("owner_id"):
            values["owner_id"] = actor.id
        values["slug"] = self._unique_slug(values.get("slug") or values["name"])
        return values

    def _after_create(self, entity: Accommodation, actor: Actor) -> None:
        self._sync_destination_count(entity.destination_id)

    def _before_update(
        self,
        values: dict[str, Any],
        entity: Accommodation,
        actor: Actor,
    ) -> dict[str, Any]:
        if "destination_id" in values and values["destination_id"] != entity.destination_id:
            self._check_destination(values["destination_id"])
        return values

    def _after_update(
        self,
        entity: Accommodation,
        actor: Actor,
        previous: Mapping[str, Any],
    ) -> None:
        old_destination_id = previous.get("destination_id", entity.destination_id)
        if old_destination_id == entity.destination_id:
            return
        for destination_id in (old_destination_id, entity.destination_id):
            self._sync_destination_count(destination_id)

    def _after_soft_delete(self, entity: Accommodation, actor: Actor) -> None:
        self._sync_destination_count(entity.destination_id)

    def _after_restore(self, entity: Accommodation, actor: Actor) -> None:
        self._sync_destination_count(entity.destination_id)

    def _after_hard_delete(self, entity: Accommodation, actor: Actor) -> None:
        self._sync_destination_count(entity.destination_id)

    def _check_destination(self, destination_id: str | None) -> None:
        """A referenced destination must exist and not be deleted."""
        if destination_id and self._destinations.find_by_id(destination_id) is None:
            raise ValidationError(
                f"Destination with ID {destination_id} not found",
                details=[field_issue("destination_id", INVALID, "not_found")],
            )

    def _sync_destination_count(self, destination_id: str | None) -> None:
        """Refresh the destination's denormalized accommodation counter."""
        if not destination_id:
            return
        destination = self._destinations.find_by_id(destination_id)
        if destination is None:
            return
        count, _ = self._repo.stats_for_destination(destination_id)
        self._destinations.set_accommodations_count(destination, count)
