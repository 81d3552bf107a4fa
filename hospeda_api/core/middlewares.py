"""
Middlewares and exception handlers for the FastAPI application.

Every failure leaving the API, including request-level validation errors,
uses the same {"error": {"code", "message", "details"}} envelope as the
service layer.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from hospeda_api.routers._common import error_response
from hospeda_api.services.validation import issues_from_errors
from hospeda_shared.config.constants import INVALID_INPUT_MESSAGE
from hospeda_shared.config.logging import api_logger as logger
from hospeda_shared.infrastructure.correlation import CorrelationIdMiddleware
from hospeda_shared.utils.exceptions import ServiceError, ServiceErrorCode, ValidationError


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """
    Validate Content-Type for requests with body.

    Returns 415 Unsupported Media Type for anything but JSON.
    """

    METHODS_WITH_BODY = {"POST", "PUT", "PATCH"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.METHODS_WITH_BODY:
            content_type = request.headers.get("content-type", "")
            if content_type and not content_type.startswith("application/json"):
                return JSONResponse(
                    status_code=415,
                    content={
                        "error": {
                            "code": ServiceErrorCode.VALIDATION_ERROR.value,
                            "message": "Unsupported Media Type. Use application/json",
                        }
                    },
                )
        return await call_next(request)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies or path/query params, before any service runs."""
    err = ValidationError(INVALID_INPUT_MESSAGE, details=issues_from_errors(exc.errors()))
    logger.warning("Request validation failed", path=request.url.path, details=err.details)
    return error_response(err)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Service errors raised outside a service call, e.g. by dependencies."""
    logger.warning(
        "Request rejected",
        path=request.url.path,
        code=exc.code.value,
        error=exc.message,
    )
    return error_response(exc)


def register_middlewares(app: FastAPI) -> None:
    """
    Register middlewares and exception handlers.

    Order matters: middlewares run in reverse order of registration, so the
    correlation id is set before anything else logs.
    """
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
