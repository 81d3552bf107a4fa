"""
Tests for BaseCRUDService behaviour with a mocked repository.

The repository mock checks what the service does NOT do as much as what it
does: denied or invalid operations must never reach a mutating call.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hospeda_api.models import utcnow
from hospeda_api.repositories import PageResult
from hospeda_api.services import AccommodationService
from hospeda_shared.config.constants import (
    AccommodationTypeEnum,
    LifecycleStatusEnum,
    ModerationStateEnum,
    VisibilityEnum,
)
from hospeda_shared.utils.exceptions import ServiceErrorCode


def entity(**overrides):
    now = utcnow()
    values = {
        "id": "acc-1",
        "slug": "cabin",
        "name": "Cabin",
        "summary": "Cozy cabin near the river",
        "description": None,
        "type": AccommodationTypeEnum.CABIN,
        "owner_id": "host-1",
        "destination_id": None,
        "visibility": VisibilityEnum.PUBLIC,
        "moderation_state": ModerationStateEnum.APPROVED,
        "lifecycle_state": LifecycleStatusEnum.ACTIVE,
        "is_featured": False,
        "price": None,
        "reviews_count": 0,
        "average_rating": 0.0,
        "created_at": now,
        "updated_at": now,
        "created_by_id": "host-1",
        "updated_by_id": "host-1",
        "deleted_at": None,
        "deleted_by_id": None,
        "is_deleted": False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def repo():
    repository = MagicMock()
    repository.exists_by.return_value = False
    repository.has_column.return_value = True
    return repository


@pytest.fixture
def service(mock_ctx, repo):
    return AccommodationService(mock_ctx, repository=repo, destinations=MagicMock())


CREATE_INPUT = {
    "name": "River Cabin",
    "summary": "Cozy cabin near the river",
    "type": "CABIN",
}


class TestCreate:
    def test_forbidden_never_calls_repository(self, service, repo, user):
        output = service.create(user, CREATE_INPUT)

        assert output.error.code == ServiceErrorCode.FORBIDDEN
        repo.create.assert_not_called()

    def test_guest_is_unauthorized(self, service, repo, guest):
        output = service.create(guest, CREATE_INPUT)

        assert output.error.code == ServiceErrorCode.UNAUTHORIZED
        repo.create.assert_not_called()

    def test_invalid_input_never_checks_permission(self, service, repo, mock_logger, guest):
        output = service.create(guest, {"name": "x"})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        mock_logger.permission.assert_not_called()
        repo.create.assert_not_called()

    def test_create_passes_actor_and_generated_slug(self, service, repo, host):
        repo.create.return_value = entity(slug="river-cabin")

        output = service.create(host, CREATE_INPUT)

        assert output.ok
        values = repo.create.call_args.args[0]
        assert values["slug"] == "river-cabin"
        assert values["owner_id"] == "host-1"
        assert repo.create.call_args.kwargs == {"user_id": "host-1"}

    def test_repository_failure_is_internal_error(self, service, repo, mock_ctx, host):
        repo.create.side_effect = RuntimeError("unique constraint failed")

        output = service.create(host, CREATE_INPUT)

        assert output.error.code == ServiceErrorCode.INTERNAL_ERROR
        assert "unique" not in output.error.message
        mock_ctx.db.rollback.assert_called_once()


class TestUpdate:
    def test_no_fields_is_validation_error(self, service, repo, host):
        output = service.update(host, "acc-1", {})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        repo.update.assert_not_called()

    def test_system_fields_are_ignored(self, service, repo, host):
        output = service.patch(host, "acc-1", {"created_by_id": "evil", "id": "other"})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        repo.update.assert_not_called()

    def test_missing_entity_is_not_found(self, service, repo, host):
        repo.find_by_id.return_value = None

        output = service.update(host, "acc-1", {"name": "New name"})

        assert output.error.code == ServiceErrorCode.NOT_FOUND

    def test_non_owner_forbidden(self, service, repo, other_host):
        repo.find_by_id.return_value = entity()

        output = service.patch(other_host, "acc-1", {"name": "New name"})

        assert output.error.code == ServiceErrorCode.FORBIDDEN
        repo.update.assert_not_called()

    def test_only_set_fields_are_written(self, service, repo, host):
        repo.find_by_id.return_value = entity()
        repo.update.return_value = entity(price=80.0)

        output = service.update(host, "acc-1", {"price": 80})

        assert output.ok
        assert repo.update.call_args.args[1] == {"price": 80.0}

    def test_after_update_sees_stored_destination(self, mock_ctx, repo, host):
        destinations = MagicMock()
        service = AccommodationService(mock_ctx, repository=repo, destinations=destinations)
        repo.find_by_id.return_value = entity(destination_id="dest-1")
        repo.stats_for_destination.return_value = (0, 0.0)

        def apply(target, values, user_id=None):
            for name, value in values.items():
                setattr(target, name, value)
            return target

        repo.update.side_effect = apply

        output = service.patch(host, "acc-1", {"destination_id": "dest-2"})

        assert output.data.destination_id == "dest-2"
        synced = [call.args[0] for call in repo.stats_for_destination.call_args_list]
        assert synced == ["dest-1", "dest-2"]

    def test_unknown_destination_never_calls_repository(self, mock_ctx, repo, host):
        destinations = MagicMock()
        destinations.find_by_id.return_value = None
        service = AccommodationService(mock_ctx, repository=repo, destinations=destinations)

        output = service.create(host, {**CREATE_INPUT, "destination_id": "does-not-exist"})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert output.error.details[0]["field"] == "destination_id"
        repo.create.assert_not_called()


class TestSoftDeleteAndRestore:
    def test_already_deleted_is_validation_error_before_permissions(self, service, repo, user):
        repo.find_by_id.return_value = entity(is_deleted=True, deleted_at=utcnow())

        output = service.soft_delete(user, "acc-1")

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        repo.soft_delete.assert_not_called()

    def test_soft_delete_loads_including_deleted(self, service, repo, host):
        repo.find_by_id.return_value = entity()
        repo.soft_delete.return_value = 1

        output = service.soft_delete(host, "acc-1")

        assert output.data.count == 1
        repo.find_by_id.assert_called_with("acc-1", include_deleted=True)

    def test_restore_of_live_entity_returns_zero(self, service, repo, host):
        repo.find_by_id.return_value = entity()

        output = service.restore(host, "acc-1")

        assert output.data.count == 0
        repo.restore.assert_not_called()

    def test_restore_deleted(self, service, repo, host):
        repo.find_by_id.return_value = entity(is_deleted=True, deleted_at=utcnow())
        repo.restore.return_value = 1

        output = service.restore(host, "acc-1")

        assert output.data.count == 1

    def test_restore_forbidden_never_calls_repository(self, service, repo, other_host):
        repo.find_by_id.return_value = entity(is_deleted=True, deleted_at=utcnow())

        output = service.restore(other_host, "acc-1")

        assert output.error.code == ServiceErrorCode.FORBIDDEN
        repo.restore.assert_not_called()

    def test_hard_delete_needs_permission(self, service, repo, host, admin):
        repo.find_by_id.return_value = entity(is_deleted=True)
        repo.hard_delete.return_value = 1

        assert service.hard_delete(host, "acc-1").error.code == ServiceErrorCode.FORBIDDEN
        assert service.hard_delete(admin, "acc-1").data.count == 1


class TestPublish:
    def test_permission_checked_before_state(self, service, repo, user):
        repo.find_by_id.return_value = entity(lifecycle_state=LifecycleStatusEnum.ACTIVE)

        output = service.publish(user, "acc-1")

        assert output.error.code == ServiceErrorCode.FORBIDDEN

    def test_only_drafts(self, service, repo, host):
        repo.find_by_id.return_value = entity(lifecycle_state=LifecycleStatusEnum.ACTIVE)

        output = service.publish(host, "acc-1")

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        repo.update.assert_not_called()

    def test_draft_becomes_active(self, service, repo, host):
        repo.find_by_id.return_value = entity(lifecycle_state=LifecycleStatusEnum.DRAFT)
        repo.update.return_value = entity()

        output = service.publish(host, "acc-1")

        assert output.ok
        assert repo.update.call_args.args[1] == {"lifecycle_state": LifecycleStatusEnum.ACTIVE}


class TestQueries:
    def test_list_scopes_to_public_without_view_all(self, service, repo, guest):
        repo.find_all.return_value = PageResult(items=[entity()], total=1)

        output = service.list(guest, {"type": "CABIN"})

        assert output.data.total == 1
        filters = repo.find_all.call_args.args[0]
        assert filters == {"type": AccommodationTypeEnum.CABIN, "visibility": VisibilityEnum.PUBLIC}

    def test_admin_list_is_unscoped(self, service, repo, admin):
        repo.find_all.return_value = PageResult(items=[], total=0)

        service.list(admin, {})

        assert repo.find_all.call_args.args[0] == {}

    def test_unknown_order_by_is_validation_error(self, service, repo, guest):
        repo.has_column.side_effect = lambda name: name != "nope"

        output = service.list(guest, {"order_by": "nope"})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        repo.find_all.assert_not_called()

    def test_page_size_over_limit_is_validation_error(self, service, guest):
        output = service.search(guest, {"page_size": 1000})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_search_passes_term_and_fields(self, service, repo, guest):
        repo.search.return_value = PageResult(items=[], total=0)

        service.search(guest, {"q": "river"})

        args = repo.search.call_args.args
        assert args[0] == "river"
        assert args[1] == ("name", "summary", "description")

    def test_count(self, service, repo, guest):
        repo.count.return_value = 7

        output = service.count(guest)

        assert output.data.count == 7

    def test_get_by_field_rejects_unknown_column(self, service, repo, guest):
        repo.has_column.return_value = False

        output = service.get_by_field(guest, "password", "x")

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        repo.find_one.assert_not_called()

    def test_private_entity_hidden_from_guest(self, service, repo, guest):
        repo.find_by_id.return_value = entity(visibility=VisibilityEnum.PRIVATE)

        output = service.get_by_id(guest, "acc-1")

        assert output.error.code == ServiceErrorCode.UNAUTHORIZED
