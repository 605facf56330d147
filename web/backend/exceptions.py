#!/usr/bin/env python3
"""
Error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import CatalogUnavailableError, MalformedInputError, ScholarScoutError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "type": error_type
        }
    )


async def service_exception_handler(
    request: Request,
    exc: ScholarScoutError
) -> JSONResponse:
    """
    Handle domain errors raised by the recommendation core.

    Malformed input is the caller's fault (400); an unreadable catalog
    means the service cannot answer (503).
    """
    status_code = 500
    if isinstance(exc, MalformedInputError):
        status_code = 400
        logger.warning(f"Rejected request to {request.url.path}: {exc}")
    elif isinstance(exc, CatalogUnavailableError):
        status_code = 503
        logger.error(f"Catalog unavailable in {request.url.path}: {exc}")
    else:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)

    return _error_response(status_code, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
