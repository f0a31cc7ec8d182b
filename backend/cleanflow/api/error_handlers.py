"""Error Handlers — FastAPI exception handlers for routes that let pipeline errors escape.

Invariants:
    - CleanflowError → structured JSON with its own code and http_status
    - Exception (catch-all) → 500 that never leaks internal details

Design Decisions:
    - Only needed where an endpoint calls the extractor directly (e.g. as a
      dependency); HTTPHandler endpoints turn errors into outputs instead
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from cleanflow.core.errors import CleanflowError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_cleanflow_error_handler(app)
    _register_generic_error_handler(app)


def _register_cleanflow_error_handler(app: FastAPI) -> None:

    @app.exception_handler(CleanflowError)
    async def cleanflow_error_handler(request: Request, exc: CleanflowError):
        """Handle extraction, validation and business errors."""
        exc.context.path = exc.context.path or request.url.path
        logger.warning(
            f"CleanflowError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
