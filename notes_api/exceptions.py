"""
Notes API - Custom Exception Hierarchy
=======================================

What:  Defines application-specific exceptions for the error scenarios of the API.
Why:   Custom exceptions let global handlers pick the HTTP status code, so
       services and the store never deal with HTTP.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` JSON bodies with the right status code.
Who:   Raised by the store and services; caught by global handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    └── NotFoundError     → 404 Not Found

The store itself only ever raises NotFoundError.
"""

from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

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


class ValidationError(NotesAPIError):
    """
    Raised when client input fails validation.

    When:    Malformed JSON, missing or blank title, empty PATCH body, bad id.
    HTTP:    400 Bad Request

    Example response:
        {"error": "Title is required"}
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


class NotFoundError(NotesAPIError):
    """
    Raised when a requested note does not exist.

    When:    GET, PATCH or DELETE /notes/{id} with an id that was never
             assigned or whose note has been deleted.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id
