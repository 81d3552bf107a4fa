"""
Destination Service.
"""

from __future__ import annotations

from typing import Any

from hospeda_api.models import Destination
from hospeda_api.repositories import AccommodationRepository, DestinationRepository
from hospeda_api.schemas import (
    AccommodationByDestinationInput,
    AccommodationOutput,
    DestinationCreate,
    DestinationOutput,
    DestinationSearch,
    DestinationStats,
    DestinationSummary,
    DestinationUpdate,
    IdInput,
    PaginatedList,
)
from hospeda_api.services.base_service import BaseCRUDService
from hospeda_api.services.context import ServiceContext
from hospeda_api.services.permissions import (
    Action,
    Actor,
    PermissionEnum,
    PermissionPolicy,
    can_view_all,
    policy_table,
)
from hospeda_api.services.result import ServiceOutput
from hospeda_shared.config.constants import VisibilityEnum

DESTINATION_POLICIES = policy_table(
    PermissionPolicy(Action.CREATE, PermissionEnum.DESTINATION_CREATE),
    PermissionPolicy(Action.UPDATE, PermissionEnum.DESTINATION_UPDATE),
    PermissionPolicy(Action.PATCH, PermissionEnum.DESTINATION_UPDATE),
    PermissionPolicy(Action.SOFT_DELETE, PermissionEnum.DESTINATION_DELETE),
    PermissionPolicy(Action.RESTORE, PermissionEnum.DESTINATION_RESTORE),
    PermissionPolicy(Action.HARD_DELETE, PermissionEnum.DESTINATION_HARD_DELETE),
    PermissionPolicy(
        Action.VIEW,
        PermissionEnum.DESTINATION_VIEW_PRIVATE,
        allow_public_if_visibility=VisibilityEnum.PUBLIC,
    ),
    PermissionPolicy(Action.LIST, public=True),
    PermissionPolicy(Action.SEARCH, public=True),
    PermissionPolicy(Action.COUNT, public=True),
    PermissionPolicy(Action.PUBLISH, PermissionEnum.DESTINATION_UPDATE),
    PermissionPolicy(Action.UPDATE_VISIBILITY, PermissionEnum.DESTINATION_VISIBILITY_CHANGE),
    PermissionPolicy(Action.SET_FEATURED, PermissionEnum.DESTINATION_FEATURED_TOGGLE),
)


class DestinationService(BaseCRUDService[Destination, DestinationOutput]):
    """Service for destinations (towns and regions hosting accommodations)."""

    view_all_permission = PermissionEnum.DESTINATION_VIEW_ALL

    def __init__(
        self,
        ctx: ServiceContext,
        repository: DestinationRepository | None = None,
        accommodations: AccommodationRepository | None = None,
    ):
        super().__init__(
            ctx,
            repository=repository or DestinationRepository(ctx.db),
            output_schema=DestinationOutput,
            create_schema=DestinationCreate,
            update_schema=DestinationUpdate,
            search_schema=DestinationSearch,
            entity_name="Destination",
            policies=DESTINATION_POLICIES,
            search_fields=("name", "summary", "city", "country"),
        )
        self._accommodations = accommodations or AccommodationRepository(ctx.db)

    def _before_create(self, values: dict[str, Any], actor: Actor) -> dict[str, Any]:
        values["slug"] = self._unique_slug(values.get("slug") or values["name"])
        return values

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_accommodations(
        self,
        actor: Actor,
        params: Any,
    ) -> ServiceOutput[PaginatedList[AccommodationOutput]]:
        """
        Accommodations located in a destination.

        The destination itself must be visible to the actor. Listings are
        limited to public ones unless the actor may view every accommodation.
        """

        def execute(validated: AccommodationByDestinationInput, actor: Actor):
            destination = self._load(validated.destination_id)
            self._can_view(actor, destination)
            filters: dict[str, Any] = {}
            if not can_view_all(actor, PermissionEnum.ACCOMMODATION_VIEW_ALL):
                filters["visibility"] = VisibilityEnum.PUBLIC
            page = self._accommodations.find_by_destination(
                destination.id,
                filters,
                page=validated.page,
                page_size=validated.page_size,
            )
            return PaginatedList[AccommodationOutput](
                items=[AccommodationOutput.model_validate(item) for item in page.items],
                total=page.total,
                page=validated.page,
                page_size=validated.page_size,
            )

        return self._run(
            "get_accommodations",
            params,
            AccommodationByDestinationInput,
            actor,
            execute,
        )

    def get_summary(self, actor: Actor, entity_id: str) -> ServiceOutput[DestinationSummary]:
        def execute(validated: IdInput, actor: Actor):
            destination = self._load(validated.id)
            self._can_view(actor, destination)
            return DestinationSummary.model_validate(destination)

        return self._run("get_summary", {"id": entity_id}, IdInput, actor, execute)

    def get_stats(self, actor: Actor, entity_id: str) -> ServiceOutput[DestinationStats]:
        """Live accommodation count and their mean rating."""

        def execute(validated: IdInput, actor: Actor):
            destination = self._load(validated.id)
            self._can_view(actor, destination)
            count, average = self._accommodations.stats_for_destination(destination.id)
            return DestinationStats(accommodations_count=count, average_rating=average)

        return self._run("get_stats", {"id": entity_id}, IdInput, actor, execute)
