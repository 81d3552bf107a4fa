"""
Shared module for common utilities used by the Hospeda API.

STRUCTURE:
- hospeda_shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging and permission audit trail
  - constants.py: Header names, limits, log redaction keys

- hospeda_shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID propagation into logs

- hospeda_shared.utils: Utilities
  - exceptions.py: Service error taxonomy and HTTP status mapping
  - validators.py: LIKE escaping, slug generation

IMPORT EXAMPLES:
    from hospeda_shared.infrastructure.db import get_db, safe_commit
    from hospeda_shared.config.settings import settings
    from hospeda_shared.config.logging import get_logger
    from hospeda_shared.utils.exceptions import NotFoundError, ForbiddenError
"""
