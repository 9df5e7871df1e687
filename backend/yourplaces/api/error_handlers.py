"""Error Handlers — global exception handlers for the YourPlaces API.

Invariants:
    - YourPlacesError → classified status + {message, error{...}} body
    - RequestValidationError → 422 with field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - Every body is produced by core/classify_error.py

Design Decisions:
    - Three-layer handler: domain (YourPlacesError), validation (Pydantic), catch-all (Exception)
    - 4xx logged at INFO (expected outcomes of input), 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from yourplaces.core.classify_error import (
    ClassifiedError, classify_error, classify_validation_failure,
)
from yourplaces.core.errors import YourPlacesError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register YourPlaces domain/infrastructure error handler."""

    @app.exception_handler(YourPlacesError)
    async def domain_error_handler(request: Request, exc: YourPlacesError):
        classified = classify_error(exc)
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": classified.status,
            "user_id": exc.context.user_id,
            "place_id": exc.context.place_id,
        }
        if classified.is_internal:
            logger.error(f"{type(exc).__name__}: {exc.message}", extra=extra)
        else:
            logger.info(f"{type(exc).__name__}: {exc.message}", extra=extra)
        return _render(classified)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.info(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        classified = classify_validation_failure()
        body = classified.to_response()
        body["error"]["details"] = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ]
        return JSONResponse(status_code=classified.status, content=body)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return _render(classify_error(exc))


def _render(classified: ClassifiedError) -> JSONResponse:
    return JSONResponse(
        status_code=classified.status, content=classified.to_response(),
    )
