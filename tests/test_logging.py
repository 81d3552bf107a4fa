"""
Tests for structured logging, masking and the permission audit trail.
"""

import json
import logging

from hospeda_api.services import PermissionAuditRecord, ServiceLogger
from hospeda_shared.config.logging import (
    StructuredFormatter,
    audit_permission_event,
    get_logger,
    mask_email,
    mask_user_id,
    redact,
)
from hospeda_shared.infrastructure.correlation import (
    CorrelationIdFilter,
    request_id_var,
    resolve_request_id,
)
from hospeda_shared.utils.exceptions import ForbiddenError, NotFoundError


class TestMasking:
    def test_mask_email(self):
        assert mask_email("maria@example.com") == "ma***@example.com"
        assert mask_email("a@example.com") == "a***@example.com"
        assert mask_email(None) == "<no-email>"
        assert mask_email("not-an-email") == "***@invalid"

    def test_mask_user_id(self):
        assert mask_user_id(None) == "<anonymous>"
        assert mask_user_id("ab") == "a***"
        assert mask_user_id("host-1") == "ho***"
        assert mask_user_id("0f8c2a1e-77b1-4d7a-9c55-0d1c3e3a9b10") == "0f8c2a1e***"

    def test_redact_nested(self):
        data = {
            "name": "Colon",
            "contact_email": "maria@example.com",
            "credentials": [{"access_token": "abc"}],
        }

        assert redact(data) == {
            "name": "Colon",
            "contact_email": "ma***@example.com",
            "credentials": [{"access_token": "***"}],
        }


class TestStructuredLogger:
    def test_kwargs_become_extra_data(self, caplog):
        logger = get_logger("hospeda_api.tests")

        with caplog.at_level(logging.INFO, logger="hospeda_api.tests"):
            logger.info("Accommodation created", accommodation_id="acc-1")

        record = caplog.records[-1]
        assert record.getMessage() == "Accommodation created"
        assert record.extra_data == {"accommodation_id": "acc-1"}

    def test_json_formatter(self, caplog):
        logger = get_logger("hospeda_api.tests")

        with caplog.at_level(logging.INFO, logger="hospeda_api.tests"):
            logger.info("Post liked", post_id="p-1")

        payload = json.loads(StructuredFormatter().format(caplog.records[-1]))
        assert payload["level"] == "INFO"
        assert payload["message"] == "Post liked"
        assert payload["data"] == {"post_id": "p-1"}


class TestAuditTrail:
    def test_audit_event_masks_actor(self, caplog):
        with caplog.at_level(logging.WARNING, logger="security.audit"):
            audit_permission_event(
                "FORBIDDEN",
                permission="destination.create",
                action="create",
                entity="Destination",
                actor_id="host-1",
                role="HOST",
            )

        record = caplog.records[-1]
        assert record.name == "security.audit"
        assert record.levelno == logging.WARNING
        assert record.extra_data["actor_id"] == "ho***"
        assert record.extra_data["permission"] == "destination.create"

    def test_service_logger_permission(self, caplog, host):
        err = ForbiddenError(
            "Permission denied: Event update",
            action="update",
            permission="event.update.any",
            entity="Event",
            entity_id="ev-1",
        )

        with caplog.at_level(logging.WARNING, logger="security.audit"):
            ServiceLogger().permission(PermissionAuditRecord.from_error(err, host))

        data = caplog.records[-1].extra_data
        assert data["event_type"] == "FORBIDDEN"
        assert data["entity_id"] == "ev-1"
        assert data["role"] == "HOST"


class TestServiceLogger:
    def test_expected_errors_are_warnings(self, caplog):
        with caplog.at_level(logging.INFO, logger="hospeda_api.services"):
            ServiceLogger().error(NotFoundError("Event", "ev-1"), "Event.get_by_id:error")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.extra_data["code"] == "NOT_FOUND"
        assert record.exc_info is None

    def test_unexpected_errors_keep_traceback(self, caplog):
        try:
            raise RuntimeError("boom")
        except RuntimeError as err:
            with caplog.at_level(logging.INFO, logger="hospeda_api.services"):
                ServiceLogger().error(err, "Event.create:error")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.extra_data["error_type"] == "RuntimeError"
        assert record.exc_info is not None

    def test_info_context(self, caplog):
        with caplog.at_level(logging.INFO, logger="hospeda_api.services"):
            ServiceLogger().info({"input": {"id": "ev-1"}}, "Event.get_by_id:start")

        record = caplog.records[-1]
        assert record.getMessage() == "Event.get_by_id:start"
        assert record.extra_data == {"input": {"id": "ev-1"}}


class TestCorrelation:
    def test_well_formed_id_is_kept(self):
        assert resolve_request_id("req-123") == "req-123"

    def test_missing_or_unsafe_id_is_replaced(self):
        for incoming in (None, "", "x" * 65, "evil\nINFO forged line"):
            request_id = resolve_request_id(incoming)

            assert request_id != incoming
            assert len(request_id) == 36

    def test_filter_stamps_current_request(self):
        record = logging.LogRecord("hospeda", logging.INFO, __file__, 1, "hello", None, None)
        token = request_id_var.set("req-9")
        try:
            CorrelationIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-9"

    def test_filter_outside_request(self):
        record = logging.LogRecord("hospeda", logging.INFO, __file__, 1, "hello", None, None)

        CorrelationIdFilter().filter(record)

        assert record.request_id == "-"
