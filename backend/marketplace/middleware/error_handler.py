"""
Global error handling middleware.

WHAT: Translate store exceptions to HTTP responses
WHY: Consistent error bodies with proper status codes
HOW: FastAPI exception handlers for business and validation exceptions
"""

from datetime import datetime

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..utils.exceptions import (
    BusinessException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
    ConflictException,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)

STATUS_BY_EXCEPTION = {
    NotFoundException: status.HTTP_404_NOT_FOUND,
    UnauthorizedException: status.HTTP_403_FORBIDDEN,
    ValidationException: status.HTTP_400_BAD_REQUEST,
    ConflictException: status.HTTP_409_CONFLICT,
}


def _error_body(code: str, message: str, details) -> dict:
    return {
        "error": code,
        "message": message,
        "details": details,
        "timestamp": datetime.now().isoformat()
    }


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle FastAPI RequestValidationError.

    WHAT: Request validation failed
    WHY: Invalid request payload
    HOW: Return 400 with field errors
    """
    logger.warning(f"Validation error: {exc.errors()}")

    cleaned_errors = []
    for error in exc.errors():
        cleaned_error = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": error.get("input")
        }
        # Exceptions inside ctx are not JSON serializable
        if "ctx" in error:
            cleaned_error["ctx"] = {
                k: str(v) if isinstance(v, Exception) else v
                for k, v in error["ctx"].items()
            }
        cleaned_errors.append(cleaned_error)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", cleaned_errors)
    )


async def business_exception_handler(request: Request, exc: BusinessException):
    """
    Handle BusinessException subclasses.

    WHAT: Typed store failure
    WHY: Caller needs the error kind, not just a message
    HOW: Look up status code by exception type, default 400
    """
    status_code = STATUS_BY_EXCEPTION.get(type(exc), status.HTTP_400_BAD_REQUEST)

    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.code, exc.message, exc.details)
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)

    logger.info("Exception handlers registered")
