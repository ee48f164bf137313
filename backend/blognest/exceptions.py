"""
BlogNest Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for every failure a service can report.
How:   Each exception carries a human-readable message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return the uniform JSON envelope with the matching HTTP status code.
Who:   Raised by stores and services; caught by the handlers in main.py.

Exception Hierarchy:
    BlogNestError (base)
    ├── ValidationError   → 400 Bad Request (missing/malformed input)
    ├── AuthError         → 401 Unauthorized (bad credentials)
    ├── NotFoundError     → 404 Not Found (referenced entity absent)
    ├── ConflictError     → 409 Conflict (duplicate unique key)
    └── StoreError        → 500 Internal Server Error (persistence failure,
                            transaction abort, data-integrity violation)
"""

from typing import Any, Dict, Optional


class BlogNestError(Exception):
    """
    Base exception for all BlogNest application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged but NOT returned to client)
        error_code:  Machine-readable kind, returned as the envelope's `error` field
        status_code: HTTP status used by the global handler
    """

    error_code = "internal_error"
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogNestError):
    """
    Raised when client input fails validation.

    When:    Missing or blank required fields, malformed values.
    HTTP:    400 Bad Request

    Example response:
        {
            "success": false,
            "message": "Title, description, image and user are all required",
            "error": "validation_error",
            "details": {"fields": ["title"]}
        }
    """

    error_code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class AuthError(BlogNestError):
    """
    Raised when credentials do not match a registered user.

    The same message is used for "unknown email" and "wrong password" so the
    response does not reveal which emails are registered.
    """

    error_code = "auth_error"
    status_code = 401

    def __init__(
        self,
        message: str = "Invalid email or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BlogNestError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; stores and services convert that
    None into NotFoundError so the handler can answer 404.
    """

    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(BlogNestError):
    """Raised when a unique key (the login email) is already taken."""

    error_code = "conflict"
    status_code = 409

    def __init__(
        self,
        message: str = "A record with the same unique key already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(BlogNestError):
    """
    Raised when the document store fails or its data is inconsistent.

    When:    Connection lost, transaction aborted, constraint violation, or a
             Blog whose owner record no longer exists.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is generic. Driver details live
        in `context` and are logged server-side only.
    """

    error_code = "store_error"
    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
