"""
Users API - Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the error scenarios of the service.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the service and database layers; caught by global handlers.

Exception Hierarchy:
    UsersApiError (base)
    ├── ValidationError          → 400 Bad Request (malformed id or body)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    └── DatabaseConnectionError  → fatal at startup (process exits)
"""

from typing import Any, Dict, Optional


class UsersApiError(Exception):
    """
    Base exception for all Users API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(UsersApiError):
    """
    Raised when client input cannot be decoded.

    When:    A path identifier that is not a 24-character hex ObjectId.
    HTTP:    400 Bad Request

    Request bodies that fail to decode are reported by FastAPI as
    RequestValidationError; main.py maps those to the same 400 shape.
    """

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


class NotFoundError(UsersApiError):
    """
    Raised when a requested resource does not exist.

    When:    PUT or DELETE /api/v1/users/{id} for an id with no document.
    HTTP:    404 Not Found

    The driver returns None from find_one_and_* for a missing document;
    the service converts that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(UsersApiError):
    """
    Raised when a database operation fails during a request.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The driver's own
    error text is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(UsersApiError):
    """
    Raised when the MongoDB client cannot be established at startup.

    Not mapped to an HTTP response: the lifespan lets it propagate, which
    aborts startup and terminates the process. There is no retry.
    """

    def __init__(
        self,
        message: str = "Could not connect to MongoDB",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
