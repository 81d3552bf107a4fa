"""
Tests for DestinationService.
"""

import pytest

from hospeda_api.services import DestinationService
from hospeda_api.services.permissions import Actor, PermissionEnum, RoleEnum
from hospeda_shared.config.constants import VisibilityEnum
from hospeda_shared.utils.exceptions import ServiceErrorCode


@pytest.fixture
def service(ctx):
    return DestinationService(ctx)


class TestDestinationCommands:
    def test_only_admin_creates(self, service, admin, host):
        data = {"name": "Colón", "summary": "A quiet town by the river", "country": "AR"}

        assert service.create(host, data).error.code == ServiceErrorCode.FORBIDDEN
        output = service.create(admin, data)
        assert output.data.slug == "colon"
        assert output.data.accommodations_count == 0

    def test_update_with_explicit_permission(self, service, make_destination):
        destination = make_destination()
        curator = Actor.for_role("curator-1", RoleEnum.USER, [PermissionEnum.DESTINATION_UPDATE])

        output = service.patch(curator, destination.id, {"city": "Federación"})

        assert output.data.city == "Federación"

    def test_disabled_admin_is_forbidden(self, service, disabled_admin, make_destination):
        destination = make_destination()

        output = service.soft_delete(disabled_admin, destination.id)

        assert output.error.code == ServiceErrorCode.FORBIDDEN


class TestDestinationQueries:
    def test_get_accommodations_hides_private(self, service, guest, make_destination, make_accommodation):
        destination = make_destination()
        public = make_accommodation(destination_id=destination.id)
        make_accommodation(destination_id=destination.id, visibility=VisibilityEnum.PRIVATE)

        output = service.get_accommodations(guest, {"destination_id": destination.id})

        assert [item.id for item in output.data.items] == [public.id]
        assert output.data.total == 1

    def test_get_accommodations_all_for_admin(self, service, admin, make_destination, make_accommodation):
        destination = make_destination()
        make_accommodation(destination_id=destination.id)
        make_accommodation(destination_id=destination.id, visibility=VisibilityEnum.PRIVATE)

        output = service.get_accommodations(admin, {"destination_id": destination.id})

        assert output.data.total == 2

    def test_get_accommodations_of_private_destination(self, service, guest, make_destination):
        destination = make_destination(visibility=VisibilityEnum.PRIVATE)

        output = service.get_accommodations(guest, {"destination_id": destination.id})

        assert output.error.code == ServiceErrorCode.UNAUTHORIZED

    def test_missing_destination(self, service, guest):
        output = service.get_accommodations(guest, {"destination_id": "missing"})

        assert output.error.code == ServiceErrorCode.NOT_FOUND

    def test_stats(self, service, guest, make_destination, make_accommodation):
        destination = make_destination()
        make_accommodation(destination_id=destination.id, average_rating=5.0)
        make_accommodation(destination_id=destination.id, average_rating=4.0)

        output = service.get_stats(guest, destination.id)

        assert output.data.accommodations_count == 2
        assert output.data.average_rating == 4.5

    def test_summary(self, service, guest, make_destination):
        destination = make_destination(name="Colón", city="Colón")

        output = service.get_summary(guest, destination.id)

        assert output.data.name == "Colón"
        assert output.data.country == "AR"

    def test_search_by_city(self, service, guest, make_destination):
        make_destination(city="Gualeguaychú")
        make_destination(city="Concordia")

        output = service.search(guest, {"q": "concordia"})

        assert [item.city for item in output.data.items] == ["Concordia"]

    def test_filter_by_country(self, service, guest, make_destination):
        make_destination(country="UY")
        make_destination(country="AR")

        assert service.count(guest, {"country": "UY"}).data.count == 1
