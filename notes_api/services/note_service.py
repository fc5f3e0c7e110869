"""
Notes API - Note Service (Request Rules)
=========================================

What:  Validates note requests and translates between API schemas and the store.
Why:   Keeps business rules (required title, non-empty patch) out of both the
       HTTP layer and the store.
How:   Each method receives the NoteStore for the current app and returns
       response schemas; failures are raised as application exceptions.
Who:   Called by route handlers in `notes_api.routes.notes`.

Design Decision:
    NoteService is stateless - it receives the store for each call. This
    enables:
    1. Easy testing: pass any NoteStore (or a mock) directly
    2. No hidden globals: each app instance has its own store
"""

import logging
from typing import List, Optional, Tuple

from notes_api.exceptions import ValidationError
from notes_api.models.note import Note, NoteUpdate
from notes_api.schemas.note import (
    MessageResponse,
    NoteCreateRequest,
    NotePatchRequest,
    NoteResponse,
)
from notes_api.store import NoteStore

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note(): title check, store, return the stored note
        - get_note():    single note lookup
        - list_notes():  title filter and optional pagination
        - update_note(): patch validation, partial update, return the note
        - delete_note(): removal

    Error Handling Strategy:
        ValidationError is raised here for bad input. NotFoundError comes
        straight from the store and is propagated unchanged.
    """

    async def create_note(self, store: NoteStore, payload: NoteCreateRequest) -> NoteResponse:
        """
        Create a note from a POST /notes body.

        Raises:
            ValidationError: title missing or blank (→ 400)
        """
        title = payload.title or ""
        if not title.strip():
            raise ValidationError(message="Title is required", field="title")

        note_id = store.create(Note(title=title, content=payload.content or ""))
        logger.info("Note %d created", note_id)

        return NoteResponse.model_validate(store.get_by_id(note_id))

    async def get_note(self, store: NoteStore, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: no note with this id (→ 404)
        """
        return NoteResponse.model_validate(store.get_by_id(note_id))

    async def list_notes(
        self,
        store: NoteStore,
        page: int = 1,
        limit: Optional[int] = None,
        q: Optional[str] = None,
    ) -> Tuple[List[NoteResponse], int]:
        """
        List notes, optionally filtered by title and paginated.

        How:
            - Notes are ordered by id so pages are stable between calls
            - q: case-insensitive substring match on the title
            - limit: page size; when omitted, every matching note is returned
            - page: 1-based page number, only meaningful with limit

        Returns:
            (notes on the requested page, total count of matching notes)
        """
        notes = sorted(store.get_all(), key=lambda n: n.id)

        if q:
            needle = q.casefold()
            notes = [n for n in notes if needle in n.title.casefold()]

        total_count = len(notes)

        if limit is not None:
            start = (page - 1) * limit
            notes = notes[start:start + limit]

        return [NoteResponse.model_validate(n) for n in notes], total_count

    async def update_note(
        self,
        store: NoteStore,
        note_id: int,
        payload: NotePatchRequest,
    ) -> NoteResponse:
        """
        Apply a PATCH /notes/{id} body.

        Validation order:
            1. At least one of title/content must be present
            2. A present title must not be blank

        Raises:
            ValidationError: no fields, or blank title (→ 400)
            NotFoundError: no note with this id (→ 404)
        """
        update = NoteUpdate(title=payload.title, content=payload.content)

        if update.is_empty():
            raise ValidationError(message="No fields to update")

        if update.title is not None and not update.title.strip():
            raise ValidationError(message="Title cannot be empty", field="title")

        store.update_partial(note_id, update)
        logger.info("Note %d updated", note_id)

        return NoteResponse.model_validate(store.get_by_id(note_id))

    async def delete_note(self, store: NoteStore, note_id: int) -> MessageResponse:
        """
        Delete a note by id.

        Raises:
            NotFoundError: no note with this id (→ 404)
        """
        store.delete(note_id)
        logger.info("Note %d deleted", note_id)
        return MessageResponse(message="Note deleted successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService holds no state; the store is passed in per call
note_service = NoteService()
