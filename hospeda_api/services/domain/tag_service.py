"""
Tag Service.

Tags are shared labels. Assignments link a tag to any taggable entity
through (entity_id, entity_type); the target must exist and be live.
"""

from __future__ import annotations

from typing import Any, Mapping

from hospeda_api.models import Tag
from hospeda_api.repositories import (
    AccommodationRepository,
    BaseRepository,
    DestinationRepository,
    EventRepository,
    PostRepository,
    TagRepository,
)
from hospeda_api.schemas import (
    CountOutput,
    EntityRefInput,
    EntityTagInput,
    EntityTagOutput,
    PopularTagOutput,
    PopularTagsInput,
    TagCreate,
    TagEntitiesInput,
    TagOutput,
    TagSearch,
    TagUpdate,
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
from hospeda_shared.config.constants import EntityTypeEnum
from hospeda_shared.utils.exceptions import NotFoundError, ValidationError

TAG_POLICIES = policy_table(
    PermissionPolicy(Action.CREATE, PermissionEnum.TAG_CREATE),
    PermissionPolicy(Action.UPDATE, PermissionEnum.TAG_UPDATE),
    PermissionPolicy(Action.PATCH, PermissionEnum.TAG_UPDATE),
    PermissionPolicy(Action.SOFT_DELETE, PermissionEnum.TAG_DELETE),
    PermissionPolicy(Action.RESTORE, PermissionEnum.TAG_RESTORE),
    PermissionPolicy(Action.HARD_DELETE, PermissionEnum.TAG_HARD_DELETE),
    PermissionPolicy(Action.VIEW, public=True),
    PermissionPolicy(Action.LIST, public=True),
    PermissionPolicy(Action.SEARCH, public=True),
    PermissionPolicy(Action.COUNT, public=True),
    PermissionPolicy(Action.ASSIGN_TAG, PermissionEnum.TAG_ASSIGN),
)

ENTITY_LABELS: dict[EntityTypeEnum, str] = {
    EntityTypeEnum.ACCOMMODATION: "Accommodation",
    EntityTypeEnum.DESTINATION: "Destination",
    EntityTypeEnum.EVENT: "Event",
    EntityTypeEnum.POST: "Post",
}


class TagService(BaseCRUDService[Tag, TagOutput]):
    """Service for tags and their entity assignments."""

    view_all_permission = PermissionEnum.TAG_VIEW_ALL

    def __init__(
        self,
        ctx: ServiceContext,
        repository: TagRepository | None = None,
        targets: Mapping[EntityTypeEnum, BaseRepository] | None = None,
    ):
        super().__init__(
            ctx,
            repository=repository or TagRepository(ctx.db),
            output_schema=TagOutput,
            create_schema=TagCreate,
            update_schema=TagUpdate,
            search_schema=TagSearch,
            entity_name="Tag",
            policies=TAG_POLICIES,
            search_fields=("name", "notes"),
        )
        if targets is None:
            targets = {
                EntityTypeEnum.ACCOMMODATION: AccommodationRepository(ctx.db),
                EntityTypeEnum.DESTINATION: DestinationRepository(ctx.db),
                EntityTypeEnum.EVENT: EventRepository(ctx.db),
                EntityTypeEnum.POST: PostRepository(ctx.db),
            }
        self._targets = targets

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _check_name_available(self, name: str, exclude_id: str | None = None) -> None:
        existing = self._repo.find_by_name(name)
        if (existing is not None and existing.id != exclude_id) or self._repo.exists_by(
            "name", name, exclude_id=exclude_id
        ):
            raise ValidationError(f"Tag '{name}' already exists")

    def _before_create(self, values: dict[str, Any], actor: Actor) -> dict[str, Any]:
        self._check_name_available(values["name"])
        values["slug"] = self._unique_slug(values.get("slug") or values["name"])
        return values

    def _before_update(self, values: dict[str, Any], entity: Tag, actor: Actor) -> dict[str, Any]:
        if values.get("name") and values["name"] != entity.name:
            self._check_name_available(values["name"], exclude_id=entity.id)
        return values

    # =========================================================================
    # Assignments
    # =========================================================================

    def _check_target(self, entity_id: str, entity_type: EntityTypeEnum) -> None:
        repository = self._targets.get(entity_type)
        if repository is None or repository.find_by_id(entity_id) is None:
            raise NotFoundError(ENTITY_LABELS.get(entity_type, entity_type.value), entity_id)

    def add_tag_to_entity(
        self,
        actor: Actor,
        tag_id: str,
        entity_id: str,
        entity_type: EntityTypeEnum | str,
    ) -> ServiceOutput[EntityTagOutput]:
        """
        Assign a tag to an entity.

        Both the tag and the target must exist. Assigning the same tag twice
        is a VALIDATION_ERROR.
        """

        def execute(validated: EntityTagInput, actor: Actor) -> EntityTagOutput:
            tag = self._load(validated.tag_id)
            self._authorize(Action.ASSIGN_TAG, actor, tag)
            self._check_target(validated.entity_id, validated.entity_type)
            if self._repo.find_assignment(tag.id, validated.entity_id, validated.entity_type):
                raise ValidationError(
                    f"Tag '{tag.name}' is already assigned to this {validated.entity_type.value.lower()}"
                )
            link = self._repo.add_to_entity(
                tag.id,
                validated.entity_id,
                validated.entity_type,
                user_id=actor.id,
            )
            return EntityTagOutput.model_validate(link)

        return self._run(
            "add_tag_to_entity",
            {"tag_id": tag_id, "entity_id": entity_id, "entity_type": entity_type},
            EntityTagInput,
            actor,
            execute,
        )

    def remove_tag_from_entity(
        self,
        actor: Actor,
        tag_id: str,
        entity_id: str,
        entity_type: EntityTypeEnum | str,
    ) -> ServiceOutput[CountOutput]:
        def execute(validated: EntityTagInput, actor: Actor) -> CountOutput:
            link = self._repo.find_assignment(
                validated.tag_id, validated.entity_id, validated.entity_type
            )
            if link is None:
                raise NotFoundError("Tag assignment")
            self._authorize(Action.ASSIGN_TAG, actor, None)
            return CountOutput(count=self._repo.remove_from_entity(link))

        return self._run(
            "remove_tag_from_entity",
            {"tag_id": tag_id, "entity_id": entity_id, "entity_type": entity_type},
            EntityTagInput,
            actor,
            execute,
        )

    def get_tags_for_entity(
        self,
        actor: Actor,
        entity_id: str,
        entity_type: EntityTypeEnum | str,
    ) -> ServiceOutput[list[TagOutput]]:
        """Live tags on an entity, by name."""

        def execute(validated: EntityRefInput, actor: Actor) -> list[TagOutput]:
            self._can_list(actor)
            tags = self._repo.find_for_entity(validated.entity_id, validated.entity_type)
            return [self.to_output(tag) for tag in tags]

        return self._run(
            "get_tags_for_entity",
            {"entity_id": entity_id, "entity_type": entity_type},
            EntityRefInput,
            actor,
            execute,
        )

    def get_entities_by_tag(
        self,
        actor: Actor,
        tag_id: str,
        entity_type: EntityTypeEnum | str | None = None,
    ) -> ServiceOutput[list[EntityTagOutput]]:
        def execute(validated: TagEntitiesInput, actor: Actor) -> list[EntityTagOutput]:
            tag = self._load(validated.tag_id)
            self._can_view(actor, tag)
            links = self._repo.find_entities_for_tag(tag.id, validated.entity_type)
            return [EntityTagOutput.model_validate(link) for link in links]

        return self._run(
            "get_entities_by_tag",
            {"tag_id": tag_id, "entity_type": entity_type},
            TagEntitiesInput,
            actor,
            execute,
        )

    def get_popular_tags(
        self,
        actor: Actor,
        limit: int | None = None,
    ) -> ServiceOutput[list[PopularTagOutput]]:
        """Live tags ordered by how many entities carry them."""

        def execute(validated: PopularTagsInput, actor: Actor) -> list[PopularTagOutput]:
            self._can_list(actor, None, validated)
            return [
                PopularTagOutput(tag=self.to_output(tag), usage_count=count)
                for tag, count in self._repo.find_popular(validated.limit)
            ]

        params = {} if limit is None else {"limit": limit}
        return self._run("get_popular_tags", params, PopularTagsInput, actor, execute)
