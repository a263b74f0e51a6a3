"""
=============================================================================
SENDA - ERROR HANDLING MODULE
=============================================================================
Domain exceptions plus global exception handlers for secure, user-friendly
error responses.

Features:
- Upstream faults (lookup service, AI assistant) map to 502
- Catches unhandled exceptions
- Logs full stack trace server-side
- Returns sanitized error message to client

Usage:
    # In main.py
    from senda.core.errors import register_exception_handlers
    register_exception_handlers(app)
=============================================================================
"""

import logging
import traceback

import requests
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from senda.core.config import settings

logger = logging.getLogger(__name__)


class SendaError(Exception):
    """Base class for errors raised by Senda services."""


class LookupTransportError(SendaError):
    """The lookup service could not be reached (DNS, connection, timeout)."""


class AssistantResponseError(SendaError):
    """The AI assistant call failed or returned an unusable payload."""


class AssistantNoCandidatesError(AssistantResponseError):
    """The assistant answered, but with no candidate content (quota, safety block)."""


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    async def upstream_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Upstream failure on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        content = {"detail": "Upstream service error"}
        if settings.DEBUG:
            content["error_type"] = type(exc).__name__
        return JSONResponse(status_code=502, content=content)

    app.add_exception_handler(SendaError, upstream_exception_handler)
    app.add_exception_handler(requests.RequestException, upstream_exception_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler for unhandled exceptions.

        - Logs the full traceback for debugging
        - Returns a generic error message to prevent info leakage
        - In debug mode, includes more details
        """
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}:\n"
            f"{traceback.format_exc()}"
        )

        if settings.DEBUG:
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal Server Error",
                    "error_type": type(exc).__name__,
                    "message": str(exc),
                    "path": request.url.path,
                },
            )
        else:
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal Server Error",
                    "message": "An unexpected error occurred. Please try again later.",
                },
            )
