"""
Global error handling middleware for the FastAPI application.

Catches SpeechBridgeError subclasses, request validation errors, and
unhandled exceptions, converting them into a consistent JSON envelope:
``{"error": ..., "code": ..., "timestamp": ...}``. Every failure is
logged here, once.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.exceptions import AUDIO_REQUIRED, SpeechBridgeError

logger = logging.getLogger(__name__)


def _envelope(
    status_code: int, error: str, code: str, timestamp: str | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "code": code,
            "timestamp": timestamp or datetime.now(UTC).isoformat(),
        },
    )


def _validation_message(errors: Sequence[dict]) -> str:
    """Summarize request validation errors as ``field: message`` pairs."""
    fields = [tuple(err.get("loc", ()))[1:] for err in errors]
    if any(loc[:1] == ("audio",) for loc in fields):
        return AUDIO_REQUIRED
    parts = [
        f"{'.'.join(str(p) for p in loc) or 'request'}: {err.get('msg', 'invalid value')}"
        for loc, err in zip(fields, errors, strict=True)
    ]
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers three handlers in priority order:
    1. ``SpeechBridgeError`` — maps domain errors to structured JSON responses.
    2. ``RequestValidationError`` — malformed multipart fields (400).
    3. ``Exception`` — catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(SpeechBridgeError)
    async def speechbridge_error_handler(request: Request, exc: SpeechBridgeError) -> JSONResponse:
        """Convert domain-specific errors into a JSON error envelope."""
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed [%s]: %s",
                request.method,
                request.url.path,
                exc.code,
                exc.detail,
                exc_info=exc if exc.__cause__ is not None else None,
            )
        else:
            logger.warning(
                "%s %s rejected [%s]: %s", request.method, request.url.path, exc.code, exc.detail
            )
        return _envelope(exc.status_code, exc.detail, exc.code, exc.timestamp)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors (e.g. a text field sent as ``audio``).

        Only a short field-level message is returned; the raw pydantic
        error list is logged, never sent to the client.
        """
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.errors())
        return _envelope(400, _validation_message(exc.errors()), "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler — reports the message without the stack trace."""
        logger.error("%s %s crashed", request.method, request.url.path, exc_info=exc)
        return _envelope(500, str(exc) or "Internal server error", "INTERNAL_ERROR")
