"""
XYFORA Backend — Exception Hierarchy
=====================================

What:  Application exceptions, one per entry of the closed `ErrorKind` set.
How:   Every exception carries its kind, a client-safe message and an
       optional context dict. The context is logged server-side; only
       validation errors echo it back to the client as `details`.
       A single handler in main.py turns any XyforaError into a JSON
       response using the kind's status code and error code.

Exception Hierarchy:
    XyforaError (base)
    ├── ValidationError          → 400 validation_error
    ├── AuthenticationError      → 401 unauthorized
    │   ├── InvalidTokenError
    │   └── TokenExpiredError
    ├── AuthorizationError       → 403 forbidden
    ├── NotFoundError            → 404 not_found
    ├── ConflictError            → 400 conflict
    ├── RateLimitExceededError   → 429 rate_limit_exceeded
    └── DatabaseError            → 500 internal_server_error
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced by the API."""

    VALIDATION = "validation_error"
    AUTHENTICATION = "unauthorized"
    AUTHORIZATION = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limit_exceeded"
    INTERNAL = "internal_server_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INTERNAL: 500,
}


class XyforaError(Exception):
    """
    Base exception for all XYFORA application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ValidationError(XyforaError):
    """
    Raised when client input fails validation: missing or malformed fields,
    or a resource id that does not have the store's id shape.

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid product ID format",
            "details": {"field": "id"}
        }
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(XyforaError):
    """Missing, invalid or expired credentials."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(AuthenticationError):
    """Token is malformed, has a bad signature, or lacks required claims."""

    def __init__(self, message: str = "Invalid token", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class TokenExpiredError(AuthenticationError):
    def __init__(self, message: str = "Token has expired", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class AuthorizationError(XyforaError):
    """
    The caller is authenticated but is not the owner of the resource.

    Only raised after the resource is known to exist, so a 403 never stands
    in for a 404.
    """

    kind = ErrorKind.AUTHORIZATION

    def __init__(
        self,
        message: str = "You can only modify your own products",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(XyforaError):
    """
    Raised when a requested resource does not exist.

    The record store returns None for missing rows; services convert that
    into this exception.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(XyforaError):
    """A uniqueness rule was violated (duplicate email on registration)."""

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(XyforaError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    Response includes a Retry-After header with the seconds until the
    oldest request leaves the window.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(XyforaError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the original error
    type travels in `context` and is only logged.
    """

    kind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
