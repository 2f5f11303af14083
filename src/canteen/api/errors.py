"""Translate domain errors into HTTP responses.

Every error body has the shape ``{"error": <kind>, "messages": {...}}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ProteanException

from canteen.api.schemas import ErrorResponse
from canteen.exceptions import error_kind, error_messages

logger = structlog.get_logger(__name__)

STATUS_CODES = {
    "NotFound": 404,
    "ItemUnavailable": 409,
    "EmptyCart": 409,
    "InvalidState": 409,
    "IllegalTransition": 409,
    "Forbidden": 403,
    "Unauthenticated": 401,
    "DependencyUnavailable": 503,
    "PickupCodesExhausted": 503,
    "ValidationError": 400,
}

# OpenAPI declaration of the error body, for every status a domain error maps to
ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in sorted(set(STATUS_CODES.values()))}


def error_response(exc: Exception) -> JSONResponse:
    kind = error_kind(exc)
    return JSONResponse(
        status_code=STATUS_CODES.get(kind, 500),
        content=ErrorResponse(error=kind, messages=error_messages(exc)).model_dump(),
    )


async def domain_exception_handler(request: Request, exc: ProteanException) -> JSONResponse:
    response = error_response(exc)
    if response.status_code >= 500:
        logger.warning("Request failed", path=request.url.path, error=error_kind(exc))
    else:
        logger.info("Request rejected", path=request.url.path, error=error_kind(exc))
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProteanException, domain_exception_handler)
