"""
Tag repository: tags plus their polymorphic entity assignments.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hospeda_api.models import EntityTag, Tag
from hospeda_shared.config.constants import EntityTypeEnum
from hospeda_shared.infrastructure.db import safe_commit

from .base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """Data access for tags and entity_tag links."""

    def __init__(self, session: Session):
        super().__init__(Tag, session)

    def find_by_name(self, name: str) -> Tag | None:
        """Case-insensitive exact name lookup."""
        query = self._apply_deleted_filter(self._base_query(), False)
        query = query.where(func.lower(Tag.name) == name.lower()).limit(1)
        return self._session.scalar(query)

    def find_popular(self, limit: int) -> list[tuple[Tag, int]]:
        """
        Live tags by number of assignments, most used first.

        Tags with no assignment are left out.
        """
        usage = func.count(EntityTag.entity_id)
        query = (
            select(Tag, usage)
            .join(EntityTag, EntityTag.tag_id == Tag.id)
            .where(Tag.deleted_at.is_(None))
            .group_by(Tag.id)
            .order_by(usage.desc(), Tag.name.asc())
            .limit(limit)
        )
        return [(tag, count) for tag, count in self._session.execute(query).all()]

    # =========================================================================
    # Assignments
    # =========================================================================

    def find_assignment(
        self,
        tag_id: str,
        entity_id: str,
        entity_type: EntityTypeEnum,
    ) -> EntityTag | None:
        return self._session.get(EntityTag, (tag_id, entity_id, entity_type))

    def find_for_entity(self, entity_id: str, entity_type: EntityTypeEnum) -> list[Tag]:
        """Live tags assigned to an entity, by name."""
        query = (
            select(Tag)
            .join(EntityTag, EntityTag.tag_id == Tag.id)
            .where(EntityTag.entity_id == entity_id)
            .where(EntityTag.entity_type == entity_type)
            .where(Tag.deleted_at.is_(None))
            .order_by(Tag.name.asc())
        )
        return list(self._session.scalars(query).all())

    def find_entities_for_tag(
        self,
        tag_id: str,
        entity_type: EntityTypeEnum | None = None,
    ) -> list[EntityTag]:
        query = select(EntityTag).where(EntityTag.tag_id == tag_id)
        if entity_type is not None:
            query = query.where(EntityTag.entity_type == entity_type)
        query = query.order_by(EntityTag.entity_type.asc(), EntityTag.created_at.asc())
        return list(self._session.scalars(query).all())

    def add_to_entity(
        self,
        tag_id: str,
        entity_id: str,
        entity_type: EntityTypeEnum,
        *,
        user_id: str | None = None,
    ) -> EntityTag:
        link = EntityTag(
            tag_id=tag_id,
            entity_id=entity_id,
            entity_type=entity_type,
            created_by_id=user_id,
        )
        self._session.add(link)
        safe_commit(self._session)
        self._session.refresh(link)
        return link

    def remove_from_entity(self, link: EntityTag) -> int:
        self._session.delete(link)
        safe_commit(self._session)
        return 1

    def hard_delete(self, entity: Tag) -> int:
        """Remove the tag and its assignments."""
        for link in self.find_entities_for_tag(entity.id):
            self._session.delete(link)
        return super().hard_delete(entity)
