"""
Blog API Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for each failure the API reports.
How:   Each exception carries a human-readable message, the HTTP status it
       maps to, and the `error` category placed in the response envelope.
       Global exception handlers (registered in main.py) turn them into
       `{success: false, error, message}` responses.
Who:   Raised by schemas, services, and route handlers.

Exception Hierarchy:
    BlogApiError (base)
    ├── ValidationError          → 400 "Validation failed"
    ├── InvalidIdError           → 400 "Invalid ID"
    ├── NotFoundError            → 404 "Not found"
    ├── DatabaseError            → 500 "Server error"
    └── DatabaseConnectionError  → fatal at startup (never reaches a client)
"""

from typing import Any, Dict, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:      User-facing error description (returned in the envelope)
        context:      Additional debug info (logged, NOT returned to client)
        status_code:  HTTP status used by the global handler
        category:     Value of the envelope's `error` field
    """

    status_code: int = 500
    category: str = "Server error"

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
    Raised when a request body is missing a required field.

    HTTP:    400 Bad Request
    When:    Missing/empty `title` or `body` on create and update.
    """

    status_code = 400
    category = "Validation failed"

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


class InvalidIdError(BlogApiError):
    """
    Raised when a path id does not match the blog identifier format.

    HTTP:    400 Bad Request
    When:    Before any store query, so a malformed id is never reported as 404.
    """

    status_code = 400
    category = "Invalid ID"

    def __init__(
        self,
        blog_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if blog_id is not None:
            ctx["blog_id"] = blog_id
        super().__init__(message="The provided blog ID is not valid", context=ctx)


class NotFoundError(BlogApiError):
    """
    Raised when a well-formed id matches no stored record.

    HTTP:    404 Not Found
    """

    status_code = 404
    category = "Not found"

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Blog post not found", context=ctx)


class DatabaseError(BlogApiError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP:    500 Internal Server Error
    The message of the underlying failure is passed through to the client.
    """

    status_code = 500
    category = "Server error"

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(BlogApiError):
    """
    Raised when the initial database connection cannot be established.

    Not handled by any exception handler: it escapes the application
    lifespan and the server process exits with a non-zero status.
    """

    def __init__(
        self,
        message: str = "Could not connect to the database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
