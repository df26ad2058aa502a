"""FastAPI error handlers for upload gateway exceptions.

This module converts gateway exceptions into plain-text responses: client
mistakes become 400s with the reason, storage backend failures become 500s.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from uploadgate.core.exceptions import (
    UploadGatewayError,
    S3ConnectionError,
    S3OperationError,
    S3ValidationError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _expose_backend_errors(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(getattr(settings, "expose_backend_errors", False))


async def gateway_exception_handler(
    request: Request,
    exc: UploadGatewayError
) -> PlainTextResponse:
    """Handle gateway exceptions.

    Args:
        request: The FastAPI request
        exc: The gateway exception

    Returns:
        PlainTextResponse with the error reason
    """
    if isinstance(exc, S3ValidationError):
        return PlainTextResponse(exc.message, status_code=400)

    if isinstance(exc, (S3OperationError, S3ConnectionError)):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.error(f"{request.method} {request.url.path} failed", exc_info=exc)

    # Backend text can leak bucket or key details, so it is opt-in.
    if _expose_backend_errors(request):
        return PlainTextResponse(exc.message, status_code=500)
    return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> PlainTextResponse:
    """Render FastAPI request validation failures as 400 plain text.

    Args:
        request: The FastAPI request
        exc: The request validation error

    Returns:
        PlainTextResponse naming the offending parameters
    """
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part not in ("query", "body")]
        if loc:
            fields.append(".".join(loc))

    message = "Invalid request"
    if fields:
        message = f"Invalid request parameters: {', '.join(fields)}"
    return PlainTextResponse(message, status_code=400)


def register_error_handlers(app: FastAPI) -> None:
    """Register all gateway error handlers with a FastAPI app.

    Args:
        app: The FastAPI application
    """
    app.add_exception_handler(UploadGatewayError, gateway_exception_handler)
    app.add_exception_handler(S3ValidationError, gateway_exception_handler)
    app.add_exception_handler(S3OperationError, gateway_exception_handler)
    app.add_exception_handler(S3ConnectionError, gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
