"""
Notes API - Note Domain Model
==============================

What:  The Note entity held by the store, plus the partial-update struct.
Why:   Keeps the stored representation independent of the HTTP schemas in
       `notes_api.schemas.note` (the API contract can evolve separately).
How:   Plain Pydantic models; the store hands out `model_copy()` values so
       callers never hold a reference to stored state.
Who:   Created by NoteService, owned by NoteStore, read by route handlers.

Field Rules:
    - id:          Assigned by the store (0 until stored), never reused
    - title:       Non-empty, enforced by the service layer
    - content:     Arbitrary text, may be empty
    - created_at:  Set once by the store, UTC, immutable afterwards
    - updated_at:  None until the first partial update
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Note(BaseModel):
    """
    A single note as stored in memory.

    Lifecycle:
        1. Built by the service from a create request (id=0, no timestamps)
        2. Stored by NoteStore.create() which assigns id and created_at
        3. Mutated only through NoteStore.update_partial()
        4. Removed by NoteStore.delete(); its id is never handed out again
    """

    id: int = 0
    title: str
    content: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Note(id={self.id}, title={self.title!r}, "
            f"created_at='{self.created_at}')>"
        )


class NoteUpdate(BaseModel):
    """
    Fields of a partial update, each independently present or absent.

    None means "absent, leave unchanged". An empty string is an explicit
    value: it overwrites content, and is ignored for title.
    """

    title: Optional[str] = None
    content: Optional[str] = None

    def is_empty(self) -> bool:
        return self.title is None and self.content is None
