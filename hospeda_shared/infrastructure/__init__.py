"""
Infrastructure module: Database sessions and request correlation.

Provides:
- Database sessions and transactions (db.py)
- Correlation IDs for request tracing (correlation.py)
"""

from hospeda_shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    safe_commit,
)
from hospeda_shared.infrastructure.correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    get_request_id,
    resolve_request_id,
)

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "safe_commit",
    # correlation
    "CorrelationIdFilter",
    "CorrelationIdMiddleware",
    "get_request_id",
    "resolve_request_id",
]
