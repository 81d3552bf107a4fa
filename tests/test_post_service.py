"""
Tests for PostService: publishing, hidden reads and likes.
"""

import logging

import pytest

from hospeda_api.services import PostService
from hospeda_api.services.permissions import Actor, PermissionEnum, RoleEnum
from hospeda_shared.config.constants import (
    LifecycleStatusEnum,
    PostCategoryEnum,
    VisibilityEnum,
)
from hospeda_shared.utils.exceptions import ServiceErrorCode


@pytest.fixture
def service(ctx):
    return PostService(ctx)


def payload(**overrides):
    values = {
        "title": "Ten places to visit",
        "summary": "Ten places to visit this summer",
        "content": "Long form content",
        "category": "TOURISM",
    }
    values.update(overrides)
    return values


class TestPublishing:
    def test_new_posts_are_drafts(self, service, editor):
        output = service.create(editor, payload())

        assert output.data.lifecycle_state == LifecycleStatusEnum.DRAFT
        assert output.data.published_at is None
        assert output.data.slug == "ten-places-to-visit"

    def test_active_on_create_is_published(self, service, editor):
        output = service.create(editor, payload(lifecycle_state="ACTIVE"))

        assert output.data.published_at is not None

    def test_publish_sets_published_at(self, service, editor):
        draft = service.create(editor, payload()).data

        output = service.publish(editor, draft.id)

        assert output.data.lifecycle_state == LifecycleStatusEnum.ACTIVE
        assert output.data.published_at is not None

    def test_publish_twice(self, service, editor):
        draft = service.create(editor, payload()).data
        service.publish(editor, draft.id)

        output = service.publish(editor, draft.id)

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR


class TestGetById:
    def test_visible_post(self, service, guest, make_post):
        post = make_post()

        output = service.get_by_id(guest, post.id)

        assert output.data["post"].id == post.id

    def test_hidden_post_is_null_not_error(self, service, user, make_post, caplog):
        post = make_post(visibility=VisibilityEnum.PRIVATE)

        with caplog.at_level(logging.WARNING, logger="security.audit"):
            output = service.get_by_id(user, post.id)

        assert output.ok
        assert output.data == {"post": None}
        audit = [record for record in caplog.records if record.name == "security.audit"]
        assert len(audit) == 1
        assert audit[0].extra_data["event_type"] == "FORBIDDEN"
        assert audit[0].extra_data["action"] == "view"

    def test_missing_post_is_not_found(self, service, guest):
        output = service.get_by_id(guest, "missing")

        assert output.error.code == ServiceErrorCode.NOT_FOUND

    def test_editor_sees_private_post(self, service, editor, make_post):
        post = make_post(visibility=VisibilityEnum.PRIVATE, author_id="someone-else")

        output = service.get_by_id(editor, post.id)

        assert output.data["post"].id == post.id


class TestLikes:
    def test_guest_cannot_like(self, service, guest, make_post):
        post = make_post()

        assert service.like(guest, post.id).error.code == ServiceErrorCode.UNAUTHORIZED

    def test_user_likes_public_post(self, service, user, make_post):
        post = make_post()

        service.like(user, post.id)
        output = service.like(user, post.id)

        assert output.data.likes == 2

    def test_cannot_like_hidden_post(self, service, user, make_post):
        post = make_post(visibility=VisibilityEnum.PRIVATE)

        assert service.like(user, post.id).error.code == ServiceErrorCode.FORBIDDEN

    def test_unlike_removes_one_like(self, service, user, make_post):
        post = make_post(likes=2)

        output = service.unlike(user, post.id)

        assert output.data.likes == 1

    def test_unlike_stops_at_zero(self, service, user, make_post):
        post = make_post()

        output = service.unlike(user, post.id)

        assert output.ok
        assert output.data.likes == 0

    def test_guest_cannot_unlike(self, service, guest, make_post):
        post = make_post(likes=1)

        assert service.unlike(guest, post.id).error.code == ServiceErrorCode.UNAUTHORIZED

    def test_unlike_missing_post(self, service, user):
        assert service.unlike(user, "missing").error.code == ServiceErrorCode.NOT_FOUND


class TestFinders:
    def test_news(self, service, guest, make_post):
        news = make_post(is_news=True)
        make_post()

        output = service.get_news(guest)

        assert [item.id for item in output.data.items] == [news.id]

    def test_featured(self, service, guest, make_post):
        featured = make_post(is_featured=True)
        make_post()
        make_post(is_featured=True, visibility=VisibilityEnum.PRIVATE)

        output = service.get_featured(guest)

        assert [item.id for item in output.data.items] == [featured.id]

    def test_by_category(self, service, guest, make_post):
        tips = make_post(category=PostCategoryEnum.TIPS)
        make_post(category=PostCategoryEnum.GENERAL)

        output = service.get_by_category(guest, {"category": "TIPS"})

        assert [item.id for item in output.data.items] == [tips.id]

    def test_search_title_and_content(self, service, guest, make_post):
        make_post(title="Carnival guide")
        make_post(content="Where to eat during carnival")
        make_post(title="Fishing trips")

        assert service.search(guest, {"q": "carnival"}).data.total == 2


class TestSummaryAndStats:
    def test_summary(self, service, guest, make_post):
        post = make_post(is_news=True)

        output = service.get_summary(guest, post.id)

        assert output.data.id == post.id
        assert output.data.title == post.title
        assert output.data.is_news is True
        assert output.data.created_at is not None
        assert not hasattr(output.data, "content")

    def test_summary_of_hidden_post(self, service, user, make_post):
        post = make_post(visibility=VisibilityEnum.PRIVATE)

        assert service.get_summary(user, post.id).error.code == ServiceErrorCode.FORBIDDEN

    def test_stats_counts_likes(self, service, user, guest, make_post):
        post = make_post()
        service.like(user, post.id)

        assert service.get_stats(guest, post.id).data.likes == 1

    def test_stats_of_missing_post(self, service, guest):
        assert service.get_stats(guest, "missing").error.code == ServiceErrorCode.NOT_FOUND


class TestDeleteKeepsDrafts:
    @pytest.fixture
    def author(self):
        return Actor.for_role(
            "author-1",
            RoleEnum.USER,
            permissions=[PermissionEnum.POST_DELETE_OWN, PermissionEnum.POST_RESTORE_OWN],
        )

    def test_own_draft_stays_draft_after_delete_and_restore(self, service, author, make_post, db_session):
        post = make_post(author_id="author-1", lifecycle_state=LifecycleStatusEnum.DRAFT)

        assert service.soft_delete(author, post.id).data.count == 1
        assert service.restore(author, post.id).data.count == 1

        db_session.refresh(post)
        assert post.lifecycle_state == LifecycleStatusEnum.DRAFT
        assert post.published_at is None
        assert post.deleted_at is None

    def test_restored_draft_still_needs_publish(self, service, author, make_post):
        post = make_post(author_id="author-1", lifecycle_state=LifecycleStatusEnum.DRAFT)
        service.soft_delete(author, post.id)
        service.restore(author, post.id)

        assert service.publish(author, post.id).error.code == ServiceErrorCode.FORBIDDEN

    def test_active_post_is_archived_while_deleted(self, service, editor, make_post, db_session):
        post = make_post()

        service.soft_delete(editor, post.id)
        db_session.refresh(post)
        assert post.lifecycle_state == LifecycleStatusEnum.ARCHIVED

        service.restore(editor, post.id)
        db_session.refresh(post)
        assert post.lifecycle_state == LifecycleStatusEnum.ACTIVE
