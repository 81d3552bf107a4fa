"""
Request correlation.

Every request carries an id, taken from the caller's X-Request-ID header
when it looks sane and generated otherwise. The id is echoed back on the
response and attached to each log record written while the request is
served, so service logs and permission audits share it.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from hospeda_shared.config.constants import Headers

# Caller ids end up in log lines: keep them short and printable
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Id of the request being served, or "" outside a request."""
    return request_id_var.get()


def resolve_request_id(incoming: str | None) -> str:
    """Keep a well-formed caller id, otherwise mint a new uuid4."""
    if incoming and _ACCEPTED_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds the request id for the duration of the request."""

    def __init__(self, app: ASGIApp, header_name: str = Headers.REQUEST_ID):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[self.header_name] = request_id
        return response


class CorrelationIdFilter(logging.Filter):
    """Stamps record.request_id; "-" outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True
