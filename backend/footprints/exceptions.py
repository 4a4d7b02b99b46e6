"""
Footprints Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the three error classes the API
       surfaces: bad client input, missing trips, and everything else.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) translate them into
       structured JSON error responses with the right HTTP status code.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    FootprintsError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── StorageServiceError      → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error

    InvalidImageKeyError (ValueError) is raised by the pure image-key helpers
    and is reported per item in batch responses rather than mapped to a status.

Security:
    `message` is safe to return to API consumers.
    `context` is logged server-side only and never included in 5xx responses.
"""

from typing import Any, Dict, Optional


class FootprintsError(Exception):
    """
    Base exception for all Footprints application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for 4xx details)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FootprintsError):
    """
    Raised when client input fails validation.

    When:    Missing owner/trip ids, visibility outside {public, private},
             a non-list fileNames / imageUrls payload.
    HTTP:    400 Bad Request

    Detected before any call to the table or the object store.

    Example response:
        {
            "error": "validation_error",
            "message": "Visibility must be 'public' or 'private'",
            "details": {"field": "Visibility"}
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


class NotFoundError(FootprintsError):
    """
    Raised when a requested trip does not exist.

    When:    GET /Trips/{id}, PUT /Trips or DELETE /Trips for an unknown
             (UserID, TripID) pair.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageServiceError(FootprintsError):
    """
    Raised when the object store client fails.

    What:    boto3/botocore could not sign a URL or reach the bucket.
    When:    Missing credentials, unknown bucket, endpoint unreachable.
    HTTP:    500 Internal Server Error (generic message; details logged)
    """

    def __init__(
        self,
        message: str = "Photo storage is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(FootprintsError):
    """
    Raised when trip table operations fail unexpectedly.

    What:    A query, insert, update or delete failed.
    When:    Connection lost mid-query, constraint violation, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. SQL, constraint
    names and driver errors are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidImageKeyError(ValueError):
    """A stored photo reference could not be turned into an object key."""
