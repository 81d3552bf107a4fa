"""
Service layer.

Structure:
    Router (thin controller)
        ↓
    Service (permissions, validation, logging)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from hospeda_api.services import AccommodationService, ServiceContext

    service = AccommodationService(ServiceContext.from_session(db))
    output = service.get_by_id(actor, accommodation_id)
"""

from .result import ServiceOutput, ErrorDetail
from .context import ServiceContext, ServiceLogger, PermissionAuditRecord
from .execution import run_with_logging_and_validation
from .base_service import BaseService, BaseCRUDService
from .domain import (
    AccommodationService,
    DestinationService,
    EventService,
    PostService,
    TagService,
)

__all__ = [
    # Envelope
    "ServiceOutput",
    "ErrorDetail",
    # Context
    "ServiceContext",
    "ServiceLogger",
    "PermissionAuditRecord",
    "run_with_logging_and_validation",
    # Base
    "BaseService",
    "BaseCRUDService",
    # Domain
    "AccommodationService",
    "DestinationService",
    "EventService",
    "PostService",
    "TagService",
]
