"""
Envelope to HTTP response mapping.

Routers never raise HTTPException for service failures: the envelope's
error code selects the status and the envelope itself is the body.
"""

from fastapi import status
from fastapi.responses import JSONResponse

from hospeda_api.services import ServiceOutput
from hospeda_shared.utils.exceptions import ERROR_STATUS_MAP, ServiceError


def to_response(output: ServiceOutput, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Usage:
        return to_response(service.create(actor, body), status.HTTP_201_CREATED)
    """
    if output.error is not None:
        status_code = ERROR_STATUS_MAP[output.error.code]
    return JSONResponse(content=output.to_dict(), status_code=status_code)


def error_response(err: ServiceError) -> JSONResponse:
    return to_response(ServiceOutput.from_error(err))
