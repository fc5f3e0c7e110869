"""
Notes API - Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the HTTP contract of the notes API.
Why:   Input parsing, response serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the Swagger/OpenAPI documentation at /docs.
Who:   Used by route handlers and NoteService.

Design Decision:
    Schemas are separate from the domain model (`notes_api.models.note`):
    request bodies only carry client-settable fields, and the store's Note
    can change without touching the wire format.

    Request schemas deliberately accept an empty or missing title: the
    "Title is required" / "Title cannot be empty" rules are business rules
    enforced by NoteService so they produce 400 with a specific message,
    rather than FastAPI's generic validation response.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /notes."""
    title: Optional[str] = Field(default=None, description="Note title (required, non-blank)")
    content: Optional[str] = Field(default=None, description="Note body (may be empty)")


class NotePatchRequest(BaseModel):
    """
    Body of PATCH /notes/{id}.

    Omitted fields and explicit nulls are both treated as absent. At least
    one field must be present.
    """
    title: Optional[str] = Field(default=None, description="New title (non-blank when given)")
    content: Optional[str] = Field(default=None, description="New content (empty string allowed)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a note.

    Timestamps are serialized as RFC 3339 strings in UTC;
    updated_at is null until the note has been patched.
    """
    id: int = Field(description="Unique note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC, RFC 3339)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When the note was last updated (null if never)",
    )

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Confirmation body, e.g. returned by DELETE /notes/{id}."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Error body for every non-2xx response.

    Example:
        {"error": "Note not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for liveness probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    notes: int = Field(description="Number of notes currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")
