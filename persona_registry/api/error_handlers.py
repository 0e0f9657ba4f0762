"""Error Handlers — global exception handlers for the persona registry API.

Invariants:
    - Every error body is text/plain holding only the raw message; no JSON envelope
    - PersonaRegistryError → its http_status; code/category/severity go to the log line
    - RequestValidationError (undecodable or invalid body) → 400 with the first decode message
    - Router HTTPException (unknown method, unknown path) → same status, plain message;
      405 bodies read "Método no permitido"
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation (Pydantic), routing (Starlette), catch-all
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from persona_registry.core.errors import PersonaRegistryError

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED_MESSAGE = "Método no permitido"
INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register persona registry domain/infrastructure error handler."""

    @app.exception_handler(PersonaRegistryError)
    async def domain_error_handler(request: Request, exc: PersonaRegistryError):
        """Handle all persona registry domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"PersonaRegistryError: {exc.message}",
            extra={
                **exc.log_fields(),
                "method": request.method,
                "path": request.url.path,
            },
        )
        return PlainTextResponse(exc.message, status_code=exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "category": "validation"},
        )
        return PlainTextResponse(
            _first_validation_message(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (405 wrong method, 404 unknown path)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = METHOD_NOT_ALLOWED_MESSAGE
        else:
            message = str(exc.detail)
        logger.warning(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"method": request.method, "path": request.url.path},
        )
        return PlainTextResponse(
            message, status_code=exc.status_code, headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return PlainTextResponse(
            INTERNAL_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    return errors[0]["msg"] if errors else "Invalid request data"
