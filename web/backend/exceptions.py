#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.scorer.exceptions import PreconditionViolation

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class ProjectNotFoundException(ServiceException):
    """Raised when a project is not found."""
    pass


class AccessDeniedException(ServiceException):
    """Raised when the caller may not act on a resource."""
    pass


class AuthenticationRequiredException(ServiceException):
    """Raised when no caller identity was forwarded."""
    pass


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, ProjectNotFoundException):
        status_code = 404
    elif isinstance(exc, AccessDeniedException):
        status_code = 403
    elif isinstance(exc, AuthenticationRequiredException):
        status_code = 401

    if status_code == 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def precondition_exception_handler(
    request: Request,
    exc: PreconditionViolation
) -> JSONResponse:
    """Scorer precondition failures are reported as bad requests."""
    logger.warning(f"Precondition violation in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": str(exc),
            "type": "PreconditionViolation"
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTP exceptions with consistent format.

    Registered on the Starlette base class, which also covers routing
    errors (unknown path, wrong method).
    """
    return JSONResponse(
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(PreconditionViolation, precondition_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
