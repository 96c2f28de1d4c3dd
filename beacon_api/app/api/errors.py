"""
Translation of domain errors into HTTP responses.

``register_error_handlers`` installs one handler for ``BeaconError``
so that every route maps the taxonomy the same way.  Client errors
echo the exception message; server errors are logged with their
traceback and answered with a fixed message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from beacon_api.app.core.exceptions import (
    AmbiguousResult,
    BeaconCreationFailed,
    BeaconError,
    BeaconNotFound,
    ConfigurationError,
    StorageError,
)

logger = logging.getLogger(__name__)

CLIENT_ERRORS = {
    BeaconNotFound: status.HTTP_404_NOT_FOUND,
    AmbiguousResult: status.HTTP_409_CONFLICT,
}

SERVER_ERRORS = {
    BeaconCreationFailed: "Beacon creation failed",
    StorageError: "Storage failure",
    ConfigurationError: "Server misconfigured",
}


async def beacon_error_handler(request: Request, exc: BeaconError) -> JSONResponse:
    for error_type, status_code in CLIENT_ERRORS.items():
        if isinstance(exc, error_type):
            return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    detail = next((text for error_type, text in SERVER_ERRORS.items() if isinstance(exc, error_type)), "Internal error")
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": detail})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BeaconError, beacon_error_handler)
