"""Mapping of portal and storage exceptions to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..db import DatabaseError
from ..errors import (
    ConfirmationRequiredError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    PortalError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: 400,
    PermissionDeniedError: 403,
    NotFoundError: 404,
    InvalidTransitionError: 409,
    ConfirmationRequiredError: 428,
}


def status_for(error: PortalError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers turning portal and database errors into JSON error responses."""

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": f"Database error: {exc}"})
