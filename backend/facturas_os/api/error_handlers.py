"""Error Handlers — global exception handlers for the Consulta API.

Invariants:
    - ConsultaError → structured JSON with error code, message, severity
    - DatabaseError never reaches the client as-is: it is answered with the
      route's public_error message (QueryFailedError envelope)
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Two-layer handler: domain (ConsultaError) and catch-all (Exception); query
      parameters are plain strings, so Pydantic request validation never fires
    - public_error as a route-level dependency: it runs before get_db, so a pool
      that was never initialized still gets the endpoint's message
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from facturas_os.core.errors import (
    ConsultaError, DatabaseError, ErrorContext, ErrorSeverity, QueryFailedError,
)

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_MESSAGE = "Error en la consulta"


def public_error(message: str):
    """Route dependency: client-safe message for database failures on this route."""

    async def _set_public_error(request: Request) -> None:
        request.state.public_error = message

    return _set_public_error


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_consulta_error_handler(app)
    _register_generic_error_handler(app)


def _to_public(request: Request, exc: ConsultaError) -> ConsultaError:
    if not isinstance(exc, DatabaseError):
        return exc
    message = getattr(request.state, "public_error", DEFAULT_DATABASE_MESSAGE)
    public = QueryFailedError(message, ErrorContext(month=exc.context.month))
    public.__cause__ = exc
    return public


def _register_consulta_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(ConsultaError)
    async def consulta_error_handler(request: Request, exc: ConsultaError):
        """Handle all Consulta domain/infrastructure errors."""
        exc = _to_public(request, exc)
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "mes": exc.context.month,
        }
        if exc.http_status >= 500:
            logger.error(
                f"ConsultaError: {exc.message} (cause: {exc.__cause__!r})",
                extra=extra,
            )
        else:
            logger.warning(f"ConsultaError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


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
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Error interno del servidor",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
