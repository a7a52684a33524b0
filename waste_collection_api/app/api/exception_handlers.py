"""
Exception handlers for the FastAPI application.

Each kind of ``WasteCollectionError`` maps to one HTTP status code.
The response body is the error's ``to_dict()``: a ``detail`` message
plus structured fields where the error has them (entity and
identifier for missing references, volume and capacity for capacity
violations).  Store failures are reported without internal details.
Any other exception is logged with its traceback and answered with a
generic 500 body, so clients always receive JSON.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    WasteCollectionError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def service_error_handler(request: Request, exc: WasteCollectionError) -> JSONResponse:
    """Translate a service error into its HTTP response."""
    status_code = next(
        (code for kind, code in STATUS_CODES.items() if isinstance(exc, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer an unexpected failure with a generic 500 body."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the error handlers with the application."""
    app.add_exception_handler(WasteCollectionError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
