"""
Mflix API: Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for the three ways a request can fail.
Why:   Services raise them without knowing about HTTP; global handlers in
       main.py translate each type into a status code and a JSON envelope.
How:   Each exception carries a user-facing `message`, a short `detail` string
       (rendered as the envelope's `error` field) and a `context` dict that is
       logged but never returned to the client.

Exception Hierarchy:
    MflixError (base)
    ├── ValidationError  → 400 Bad Request (malformed id, page params, body)
    ├── NotFoundError    → 404 Not Found (referenced document absent)
    └── InternalError    → 500 Internal Server Error (store failure, bug)

Envelope rendered for every error:
    {
        "status": 404,
        "message": "Movie not found",
        "error": "No movie found with the given ID",
        "request_id": "a1b2c3d4"
    }
"""

from typing import Any, Dict, Optional


class MflixError(Exception):
    """
    Base exception for all Mflix API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        detail:   Short explanation rendered as the `error` field
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.detail = detail or message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MflixError):
    """
    Raised when client input fails validation.

    When:    Identifier is not a 24-character hex ObjectId, page/limit out of
             bounds, request body rejected by its schema.
    HTTP:    400 Bad Request

    Raised before any store access, so a malformed id never costs a query.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        detail: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, detail=detail, context=ctx)
        self.field = field


class NotFoundError(MflixError):
    """
    Raised when a referenced document does not exist.

    When:    GET/PUT/DELETE on an unknown id, or a parent-scoped list/create
             whose parent (e.g. the movie) is missing.
    HTTP:    404 Not Found

    The driver returns None (or a zero matched/deleted count) for missing
    documents; services convert that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message,
            detail=detail or f"No {resource} found with the given ID",
            context=ctx,
        )
        self.resource = resource
        self.resource_id = resource_id


class InternalError(MflixError):
    """
    Raised when a data-store operation fails unexpectedly.

    When:    Server selection timeout, network error, driver error mid-query.
    HTTP:    500 Internal Server Error

    Security Note:
        The driver's message can contain host names and query text, so it only
        goes to the log. The response carries the exception type name.
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, detail=detail, context=context)
