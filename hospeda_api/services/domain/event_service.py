"""
Event Service.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from hospeda_api.models import Event, utcnow
from hospeda_api.repositories import EventRepository
from hospeda_api.schemas import (
    EventByAuthorInput,
    EventByCategoryInput,
    EventByLocationInput,
    EventCreate,
    EventOutput,
    EventSearch,
    EventSummary,
    EventUpcomingInput,
    EventUpdate,
    IdInput,
    PaginatedList,
    SearchParams,
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
from hospeda_api.services.validation import TOO_SMALL, field_issue
from hospeda_shared.config.constants import VisibilityEnum
from hospeda_shared.utils.exceptions import ValidationError

EVENT_POLICIES = policy_table(
    PermissionPolicy(Action.CREATE, PermissionEnum.EVENT_CREATE),
    PermissionPolicy(
        Action.UPDATE,
        PermissionEnum.EVENT_UPDATE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.EVENT_UPDATE_OWN,
    ),
    PermissionPolicy(
        Action.PATCH,
        PermissionEnum.EVENT_UPDATE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.EVENT_UPDATE_OWN,
    ),
    PermissionPolicy(
        Action.SOFT_DELETE,
        PermissionEnum.EVENT_DELETE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.EVENT_DELETE_OWN,
    ),
    PermissionPolicy(
        Action.RESTORE,
        PermissionEnum.EVENT_RESTORE_ANY,
        allow_owner=True,
        owner_permission=PermissionEnum.EVENT_RESTORE_OWN,
    ),
    PermissionPolicy(Action.HARD_DELETE, PermissionEnum.EVENT_HARD_DELETE),
    PermissionPolicy(
        Action.VIEW,
        PermissionEnum.EVENT_VIEW_PRIVATE,
        allow_owner=True,
        allow_public_if_visibility=VisibilityEnum.PUBLIC,
    ),
    PermissionPolicy(Action.LIST, public=True),
    PermissionPolicy(Action.SEARCH, public=True),
    PermissionPolicy(Action.COUNT, public=True),
    PermissionPolicy(Action.PUBLISH, PermissionEnum.EVENT_PUBLISH),
    PermissionPolicy(Action.UPDATE_VISIBILITY, PermissionEnum.EVENT_VISIBILITY_CHANGE),
    PermissionPolicy(Action.SET_FEATURED, PermissionEnum.EVENT_FEATURED_TOGGLE),
)


def as_utc(value: datetime) -> datetime:
    """SQLite returns naive datetimes; treat them as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventService(BaseCRUDService[Event, EventOutput]):
    """
    Service for events.

    Events belong to their author (author_id). The slug combines category,
    name and start date so recurring events get distinct slugs.
    """

    owner_field = "author_id"
    view_all_permission = PermissionEnum.EVENT_VIEW_ALL

    def __init__(self, ctx: ServiceContext, repository: EventRepository | None = None):
        super().__init__(
            ctx,
            repository=repository or EventRepository(ctx.db),
            output_schema=EventOutput,
            create_schema=EventCreate,
            update_schema=EventUpdate,
            search_schema=EventSearch,
            entity_name="Event",
            policies=EVENT_POLICIES,
            search_fields=("name", "summary", "city"),
        )

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _before_create(self, values: dict[str, Any], actor: Actor) -> dict[str, Any]:
        self._check_dates(values["start_date"], values.get("end_date"))
        if not values.get("author_id"):
            values["author_id"] = actor.id
        if values.get("slug"):
            values["slug"] = self._unique_slug(values["slug"])
        else:
            values["slug"] = self._unique_slug(
                values["category"].value,
                values["name"],
                values["start_date"].strftime("%Y-%m-%d"),
            )
        return values

    def _before_update(
        self,
        values: dict[str, Any],
        entity: Event,
        actor: Actor,
    ) -> dict[str, Any]:
        if "start_date" in values or "end_date" in values:
            start = values.get("start_date", entity.start_date)
            end = values["end_date"] if "end_date" in values else entity.end_date
            if start is None:
                raise ValidationError(
                    "start_date cannot be cleared",
                    details=[field_issue("start_date", TOO_SMALL, "missing")],
                )
            self._check_dates(start, end)
        return values

    @staticmethod
    def _check_dates(start: datetime, end: datetime | None) -> None:
        if end is not None and as_utc(end) < as_utc(start):
            raise ValidationError(
                "end_date must not be before start_date",
                details=[field_issue("end_date", TOO_SMALL, "date_order")],
            )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def _page(self, actor: Actor, validated: SearchParams, filters: dict[str, Any]):
        self._can_list(actor, None, validated)
        filters = self._scope_filters(actor, filters)
        page = self._repo.find_all(
            filters,
            page=validated.page,
            page_size=validated.page_size,
            order_by="start_date",
        )
        return self.to_page(page, validated)

    def get_by_author(self, actor: Actor, params: Any) -> ServiceOutput[PaginatedList[EventOutput]]:
        def execute(validated: EventByAuthorInput, actor: Actor):
            return self._page(actor, validated, {"author_id": validated.author_id})

        return self._run("get_by_author", params, EventByAuthorInput, actor, execute)

    def get_by_category(self, actor: Actor, params: Any) -> ServiceOutput[PaginatedList[EventOutput]]:
        def execute(validated: EventByCategoryInput, actor: Actor):
            return self._page(actor, validated, {"category": validated.category})

        return self._run("get_by_category", params, EventByCategoryInput, actor, execute)

    def get_by_location(self, actor: Actor, params: Any) -> ServiceOutput[PaginatedList[EventOutput]]:
        """Events in a city, soonest first."""

        def execute(validated: EventByLocationInput, actor: Actor):
            return self._page(actor, validated, {"city": validated.city})

        return self._run("get_by_location", params, EventByLocationInput, actor, execute)

    def get_upcoming(self, actor: Actor, params: Any = None) -> ServiceOutput[PaginatedList[EventOutput]]:
        """Events starting between now and now + days_ahead, soonest first."""

        def execute(validated: EventUpcomingInput, actor: Actor):
            self._can_list(actor, None, validated)
            filters: dict[str, Any] = {}
            if validated.category is not None:
                filters["category"] = validated.category
            if validated.city:
                filters["city"] = validated.city
            filters = self._scope_filters(actor, filters)
            now = utcnow()
            page = self._repo.find_upcoming(
                now,
                now + timedelta(days=validated.days_ahead),
                filters,
                page=validated.page,
                page_size=validated.page_size,
            )
            return self.to_page(page, validated)

        return self._run("get_upcoming", params or {}, EventUpcomingInput, actor, execute)

    def get_free(self, actor: Actor, params: Any = None) -> ServiceOutput[PaginatedList[EventOutput]]:
        def execute(validated: SearchParams, actor: Actor):
            self._can_list(actor, None, validated)
            filters = self._scope_filters(actor, {})
            page = self._repo.find_free(filters, page=validated.page, page_size=validated.page_size)
            return self.to_page(page, validated)

        return self._run("get_free", params or {}, SearchParams, actor, execute)

    def get_summary(self, actor: Actor, entity_id: str) -> ServiceOutput[EventSummary]:
        def execute(validated: IdInput, actor: Actor):
            event = self._load(validated.id)
            self._can_view(actor, event)
            return EventSummary(
                id=event.id,
                slug=event.slug,
                name=event.name,
                category=event.category,
                start_date=event.start_date,
                city=event.city,
                is_free=event.price is None or event.price == 0,
            )

        return self._run("get_summary", {"id": entity_id}, IdInput, actor, execute)
