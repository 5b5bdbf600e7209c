"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from circulation.errors import (
    CONFIGURATION_ERROR,
    DUPLICATE_RESOURCE,
    INVALID_ARGUMENT,
    INVALID_STATE,
    NOT_FOUND,
    DuplicateResourceError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    UnknownTierError,
)
from circulation.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        str(exc),
        NOT_FOUND,
    )


def duplicate_resource_error_handler(
    _request: Request, exc: DuplicateResourceError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        DUPLICATE_RESOURCE,
    )


def invalid_state_error_handler(
    _request: Request, exc: InvalidStateError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        INVALID_STATE,
    )


def invalid_argument_error_handler(
    _request: Request, exc: InvalidArgumentError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        INVALID_ARGUMENT,
    )


def unknown_tier_error_handler(_request: Request, exc: UnknownTierError) -> JSONResponse:
    logger.error(f"Tier configuration error: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc),
        CONFIGURATION_ERROR,
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(DuplicateResourceError, duplicate_resource_error_handler)
    app.add_exception_handler(InvalidStateError, invalid_state_error_handler)
    app.add_exception_handler(InvalidArgumentError, invalid_argument_error_handler)
    app.add_exception_handler(UnknownTierError, unknown_tier_error_handler)
