"""
Blog API Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios of the posts API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    BlogApiError (base)              -> 500 Internal Server Error
    ├── ValidationError              -> 400 Bad Request (client can fix)
    ├── NotFoundError                -> 404 Not Found
    └── DatabaseError                -> 500 Internal Server Error
        └── StoreUnavailableError    -> 503 Service Unavailable
"""

from typing import Any, Dict, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client,
                  except for validation details)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """
    Raised when client input fails validation.

    When:    Missing or blank required fields, null values in an update,
             path/body id mismatch on PUT.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Request path id and request body id values must match",
            "details": {"field": "id"}
        }
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


class NotFoundError(BlogApiError):
    """
    Raised when a requested resource does not exist.

    When:    GET or PUT /posts/{id} with an id that has no stored post.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; the service layer converts
    that None into this exception.
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


class DatabaseError(BlogApiError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver details
    (SQL, constraint names) are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(DatabaseError):
    """
    Raised when the store cannot be reached (refused connection, dropped socket).

    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "The post store is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
