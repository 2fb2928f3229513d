"""
Business exceptions raised by the marketplace store.

WHAT: Typed failures for every store operation
WHY: Callers get a machine-readable error kind, not a bare string
HOW: Custom exception classes with error codes, messages and details
"""

from typing import Optional, Any


class BusinessException(Exception):
    """Base class for business logic exceptions."""

    def __init__(self, message: str, code: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class NotFoundException(BusinessException):
    """Raised when a referenced profile, item or order does not exist."""

    def __init__(self, kind: str, key: Any):
        super().__init__(
            message=f"{kind.capitalize()} not found: {key}",
            code="NOT_FOUND",
            details={"kind": kind, "key": str(key)}
        )


class UnauthorizedException(BusinessException):
    """Raised when the caller lacks the relationship an operation requires."""

    def __init__(self, message: str, caller: Any = None):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            details={"caller": str(caller)} if caller is not None else None
        )


class ValidationException(BusinessException):
    """Raised for validation errors (anonymous caller, rating out of range)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field} if field else None
        )


class ConflictException(BusinessException):
    """Raised when an item is already unavailable or a review already exists."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            details=details
        )
