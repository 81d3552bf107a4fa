"""
Tests for AccommodationService against SQLite.

Tests cover:
- Ownership and slug assignment on create
- Destination counter kept in sync across the lifecycle
- Visibility-aware reads and listings
- Entity-specific finders
"""

import pytest

from hospeda_api.models import utcnow
from hospeda_api.services import AccommodationService
from hospeda_shared.config.constants import (
    AccommodationTypeEnum,
    LifecycleStatusEnum,
    VisibilityEnum,
)
from hospeda_shared.utils.exceptions import ServiceErrorCode


@pytest.fixture
def service(ctx):
    return AccommodationService(ctx)


def payload(**overrides):
    values = {
        "name": "River Cabin",
        "summary": "Cozy cabin near the river",
        "type": "CABIN",
    }
    values.update(overrides)
    return values


class TestCreate:
    def test_owner_defaults_to_actor(self, service, host):
        output = service.create(host, payload())

        assert output.ok
        assert output.data.owner_id == "host-1"
        assert output.data.created_by_id == "host-1"
        assert output.data.slug == "river-cabin"

    def test_duplicate_names_get_suffixed_slugs(self, service, host):
        first = service.create(host, payload())
        second = service.create(host, payload())

        assert first.data.slug == "river-cabin"
        assert second.data.slug == "river-cabin-2"

    def test_accented_name_slug(self, service, host):
        output = service.create(host, payload(name="Hotel Río Uruguay"))

        assert output.data.slug == "hotel-rio-uruguay"

    def test_create_counts_toward_destination(self, service, host, make_destination, db_session):
        destination = make_destination()

        service.create(host, payload(destination_id=destination.id))
        service.create(host, payload(destination_id=destination.id))

        db_session.refresh(destination)
        assert destination.accommodations_count == 2

    def test_invalid_type_is_validation_error(self, service, host):
        output = service.create(host, payload(type="CASTLE"))

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert output.error.details[0]["field"] == "type"


class TestDestinationReference:
    def test_create_with_unknown_destination(self, service, host):
        output = service.create(host, payload(destination_id="does-not-exist"))

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert output.error.details[0]["field"] == "destination_id"
        assert service.count(host).data.count == 0

    def test_create_with_deleted_destination(self, service, host, make_destination):
        destination = make_destination(deleted_at=utcnow())

        output = service.create(host, payload(destination_id=destination.id))

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_move_to_unknown_destination(self, service, host, make_destination, make_accommodation, db_session):
        destination = make_destination()
        accommodation = make_accommodation(destination_id=destination.id)

        output = service.patch(host, accommodation.id, {"destination_id": "does-not-exist"})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert output.error.details[0]["field"] == "destination_id"
        db_session.refresh(accommodation)
        assert accommodation.destination_id == destination.id


class TestDestinationCounter:
    def test_soft_delete_and_restore(self, service, host, make_destination, make_accommodation, db_session):
        destination = make_destination()
        accommodation = make_accommodation(destination_id=destination.id)
        make_accommodation(destination_id=destination.id)

        assert service.soft_delete(host, accommodation.id).data.count == 1
        db_session.refresh(destination)
        assert destination.accommodations_count == 1

        assert service.restore(host, accommodation.id).data.count == 1
        db_session.refresh(destination)
        assert destination.accommodations_count == 2

    def test_moving_updates_both_destinations(self, service, host, make_destination, make_accommodation, db_session):
        origin = make_destination()
        target = make_destination()
        accommodation = make_accommodation(destination_id=origin.id)

        output = service.patch(host, accommodation.id, {"destination_id": target.id})

        assert output.data.destination_id == target.id
        db_session.refresh(origin)
        db_session.refresh(target)
        assert origin.accommodations_count == 0
        assert target.accommodations_count == 1

    def test_hard_delete(self, service, admin, make_destination, make_accommodation, db_session):
        destination = make_destination()
        accommodation = make_accommodation(destination_id=destination.id)
        make_accommodation(destination_id=destination.id)

        assert service.hard_delete(admin, accommodation.id).data.count == 1
        db_session.refresh(destination)
        assert destination.accommodations_count == 1


class TestLifecycle:
    def test_soft_delete_twice_is_validation_error(self, service, host, make_accommodation):
        accommodation = make_accommodation()
        service.soft_delete(host, accommodation.id)

        output = service.soft_delete(host, accommodation.id)

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_deleted_entity_not_found_by_id(self, service, host, make_accommodation):
        accommodation = make_accommodation()
        service.soft_delete(host, accommodation.id)

        output = service.get_by_id(host, accommodation.id)

        assert output.error.code == ServiceErrorCode.NOT_FOUND

    def test_delete_and_restore_round_trip(self, service, host, make_accommodation, db_session):
        accommodation = make_accommodation(price=80.0)
        before = {
            name: getattr(accommodation, name)
            for name in ("name", "slug", "summary", "type", "owner_id", "visibility", "price", "lifecycle_state")
        }

        service.soft_delete(host, accommodation.id)
        output = service.restore(host, accommodation.id)

        assert output.data.count == 1
        db_session.refresh(accommodation)
        assert accommodation.deleted_at is None
        assert accommodation.deleted_by_id is None
        assert accommodation.lifecycle_state == LifecycleStatusEnum.ACTIVE
        assert {name: getattr(accommodation, name) for name in before} == before
        assert service.get_by_id(host, accommodation.id).ok

    def test_other_host_cannot_delete(self, service, other_host, make_accommodation):
        accommodation = make_accommodation()

        output = service.soft_delete(other_host, accommodation.id)

        assert output.error.code == ServiceErrorCode.FORBIDDEN

    def test_publish_draft(self, service, host, make_accommodation):
        accommodation = make_accommodation(lifecycle_state=LifecycleStatusEnum.DRAFT)

        output = service.publish(host, accommodation.id)

        assert output.data.lifecycle_state == LifecycleStatusEnum.ACTIVE

    def test_owner_changes_visibility(self, service, host, make_accommodation):
        accommodation = make_accommodation()

        output = service.update_visibility(host, accommodation.id, "PRIVATE")

        assert output.data.visibility == VisibilityEnum.PRIVATE

    def test_featured_needs_toggle_permission(self, service, host, admin, make_accommodation):
        accommodation = make_accommodation()

        assert service.set_featured_status(host, accommodation.id, True).error.code == ServiceErrorCode.FORBIDDEN
        assert service.set_featured_status(admin, accommodation.id, True).data.is_featured is True

    def test_update_stamps_updated_by(self, service, admin, make_accommodation):
        accommodation = make_accommodation()

        output = service.update(admin, accommodation.id, {"name": "Renamed cabin"})

        assert output.data.name == "Renamed cabin"
        assert output.data.updated_by_id == "admin-1"
        assert output.data.slug == accommodation.slug


class TestReads:
    def test_private_listing_visibility(self, service, guest, user, host, make_accommodation):
        accommodation = make_accommodation(visibility=VisibilityEnum.PRIVATE)

        assert service.get_by_id(guest, accommodation.id).error.code == ServiceErrorCode.UNAUTHORIZED
        assert service.get_by_id(user, accommodation.id).error.code == ServiceErrorCode.FORBIDDEN
        assert service.get_by_id(host, accommodation.id).data.id == accommodation.id

    def test_list_hides_private_from_guest(self, service, guest, admin, make_accommodation):
        public = make_accommodation()
        make_accommodation(visibility=VisibilityEnum.PRIVATE)

        guest_page = service.list(guest)
        admin_page = service.list(admin)

        assert [item.id for item in guest_page.data.items] == [public.id]
        assert admin_page.data.total == 2

    def test_search(self, service, guest, make_accommodation):
        make_accommodation(name="River Lodge")
        make_accommodation(name="Mountain Hut", summary="High up in the hills")

        output = service.search(guest, {"q": "lodge"})

        assert [item.name for item in output.data.items] == ["River Lodge"]

    def test_count_with_filter(self, service, guest, make_accommodation):
        make_accommodation(type=AccommodationTypeEnum.HOTEL)
        make_accommodation(type=AccommodationTypeEnum.CABIN)

        assert service.count(guest, {"type": "HOTEL"}).data.count == 1

    def test_get_by_slug(self, service, guest, make_accommodation):
        accommodation = make_accommodation(slug="river-lodge")

        assert service.get_by_slug(guest, "river-lodge").data.id == accommodation.id
        assert service.get_by_slug(guest, "nope").error.code == ServiceErrorCode.NOT_FOUND

    def test_get_by_destination(self, service, guest, make_destination, make_accommodation):
        destination = make_destination()
        inside = make_accommodation(destination_id=destination.id)
        make_accommodation()

        output = service.get_by_destination(guest, {"destination_id": destination.id})

        assert [item.id for item in output.data.items] == [inside.id]

    def test_get_by_type(self, service, guest, make_accommodation):
        hotel = make_accommodation(type=AccommodationTypeEnum.HOTEL)
        make_accommodation(type=AccommodationTypeEnum.CABIN)

        output = service.get_by_type(guest, {"type": "HOTEL"})

        assert [item.id for item in output.data.items] == [hotel.id]

    def test_top_rated(self, service, guest, make_accommodation):
        make_accommodation(average_rating=2.0)
        best = make_accommodation(average_rating=4.9)
        make_accommodation(average_rating=5.0, visibility=VisibilityEnum.PRIVATE)

        output = service.get_top_rated(guest, {"limit": 1})

        assert [item.id for item in output.data] == [best.id]

    def test_summary(self, service, guest, make_accommodation):
        accommodation = make_accommodation(average_rating=4.5, reviews_count=12)

        output = service.get_summary(guest, accommodation.id)

        assert output.data.reviews_count == 12
        assert output.data.average_rating == 4.5

    def test_similar(self, service, guest, make_destination, make_accommodation):
        destination = make_destination()
        source = make_accommodation(destination_id=destination.id, average_rating=3.0)
        good = make_accommodation(destination_id=destination.id, average_rating=4.0)
        best = make_accommodation(destination_id=destination.id, average_rating=4.8)
        make_accommodation(destination_id=destination.id, type=AccommodationTypeEnum.HOTEL)
        make_accommodation(average_rating=5.0)
        make_accommodation(destination_id=destination.id, visibility=VisibilityEnum.PRIVATE)

        output = service.get_similar(guest, source.id)

        assert [item.id for item in output.data] == [best.id, good.id]

    def test_similar_limit(self, service, guest, make_destination, make_accommodation):
        destination = make_destination()
        source = make_accommodation(destination_id=destination.id)
        for _ in range(3):
            make_accommodation(destination_id=destination.id)

        assert len(service.get_similar(guest, source.id, limit=2).data) == 2
        assert service.get_similar(guest, source.id, limit=0).error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_similar_of_missing(self, service, guest):
        assert service.get_similar(guest, "missing").error.code == ServiceErrorCode.NOT_FOUND


class TestPagination:
    @pytest.fixture
    def many(self, make_accommodation):
        return [make_accommodation() for _ in range(25)]

    def test_list_pages(self, service, guest, many):
        first = service.list(guest, {"page_size": 10})
        last = service.list(guest, {"page_size": 10, "page": 3})

        assert len(first.data.items) == 10
        assert first.data.total == 25
        assert len(last.data.items) == 5
        assert last.data.total == 25

    def test_search_pages(self, service, guest, many):
        output = service.search(guest, {"q": "accommodation", "page_size": 10, "page": 2})

        assert len(output.data.items) == 10
        assert output.data.total == 25
        assert output.data.page == 2

    def test_pages_do_not_overlap(self, service, guest, many):
        seen = []
        for page in (1, 2, 3):
            seen += [item.id for item in service.list(guest, {"page_size": 10, "page": page}).data.items]

        assert sorted(seen) == sorted(item.id for item in many)


class TestAdminInfo:
    def test_owner_sets_and_reads(self, service, host, make_accommodation):
        accommodation = make_accommodation()

        output = service.set_admin_info(host, accommodation.id, {"notes": "  call the owner  ", "favorite": True})

        assert output.data.admin_info.notes == "call the owner"
        assert output.data.admin_info.favorite is True
        stored = service.get_admin_info(host, accommodation.id)
        assert stored.data.admin_info.notes == "call the owner"

    def test_empty_until_set(self, service, host, make_accommodation):
        accommodation = make_accommodation()

        assert service.get_admin_info(host, accommodation.id).data.admin_info is None

    def test_other_host_forbidden(self, service, other_host, make_accommodation):
        accommodation = make_accommodation()

        output = service.set_admin_info(other_host, accommodation.id, {"notes": "mine now"})

        assert output.error.code == ServiceErrorCode.FORBIDDEN
        assert service.get_admin_info(other_host, accommodation.id).error.code == ServiceErrorCode.FORBIDDEN

    def test_unknown_key_is_validation_error(self, service, host, make_accommodation):
        accommodation = make_accommodation()

        output = service.set_admin_info(host, accommodation.id, {"rating": 5})

        assert output.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_missing_entity(self, service, host):
        assert service.get_admin_info(host, "missing").error.code == ServiceErrorCode.NOT_FOUND

    def test_not_in_public_output(self, service, host, guest, make_accommodation):
        accommodation = make_accommodation()
        service.set_admin_info(host, accommodation.id, {"notes": "staff only"})

        output = service.get_by_id(guest, accommodation.id)

        assert "admin_info" not in output.data.model_dump()
