"""
Notes API - Notes Route Handlers
=================================

What:  CRUD endpoints for the note resource.
Why:   The HTTP surface of the service; the only consumer of NoteStore.
How:   The note id is resolved first, then the raw body is decoded as JSON
       whatever its Content-Type, then NoteService applies the rules.
       Global exception handlers turn errors into `{"error": ...}` bodies.

Route Inventory:
    POST   /notes        → 201 created note
    GET    /notes        → 200 array of notes (+ X-Total-Count)
    GET    /notes/{id}   → 200 note
    PATCH  /notes/{id}   → 200 updated note
    DELETE /notes/{id}   → 200 {"message": "Note deleted successfully"}
"""

from typing import List, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from notes_api.config import settings
from notes_api.exceptions import ValidationError
from notes_api.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreateRequest,
    NotePatchRequest,
    NoteResponse,
)
from notes_api.services.note_service import note_service
from notes_api.store import NoteStore, get_note_store

# Note ids are base-10 signed 64-bit integers; anything else is "Invalid note ID"
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
NOTE_ID_PATTERN = r"^[+-]?[0-9]+$"

Body = TypeVar("Body", bound=BaseModel)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix=settings.api_prefix, tags=["Notes"])


def note_id_param(
    note_id: str = Path(pattern=NOTE_ID_PATTERN, description="Note identifier"),
) -> int:
    """
    Resolve the `{note_id}` path segment to an int.

    Only plain decimal digits with an optional sign are accepted, so forms
    like " 1", "1.0" or "1_0" are rejected instead of coerced.
    """
    value = int(note_id)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValidationError("Invalid note ID", field="note_id")
    return value


async def parse_body(request: Request, schema: Type[Body]) -> Body:
    """Decode the request body as JSON into `schema`, ignoring Content-Type."""
    try:
        return schema.model_validate_json(await request.body())
    except PydanticValidationError as e:
        raise ValidationError("Invalid JSON", context={"errors": e.errors()}) from e


def _json_body(schema: Type[BaseModel]) -> dict:
    # Bodies are parsed by hand, so describe them for the OpenAPI docs here
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid JSON or missing title", "model": ErrorResponse},
    },
    summary="Create a note",
    openapi_extra=_json_body(NoteCreateRequest),
)
async def create_note(
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    payload = await parse_body(request, NoteCreateRequest)
    return await note_service.create_note(store, payload)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        400: {"description": "Invalid query parameters", "model": ErrorResponse},
    },
    summary="List notes",
    description=(
        "Returns every note. Optional `q` filters by title (case-insensitive), "
        "and `limit`/`page` paginate the result. The total number of matching "
        "notes is returned in the X-Total-Count header."
    ),
)
async def list_notes(
    response: Response,
    page: int = Query(default=1, ge=1, description="Page number (1-based)"),
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Page size"),
    q: Optional[str] = Query(default=None, description="Search in title"),
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    notes, total_count = await note_service.list_notes(store, page=page, limit=limit, q=q)
    response.headers["X-Total-Count"] = str(total_count)
    return notes


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid note ID", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get a note",
)
async def get_note(
    note_id: int = Depends(note_id_param),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.get_note(store, note_id)


@router.patch(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid note ID, invalid JSON, or invalid fields", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Partially update a note",
    description=(
        "Updates only the fields present in the body. A blank title is rejected; "
        "an empty content string clears the content. updated_at is refreshed on "
        "every successful call."
    ),
    openapi_extra=_json_body(NotePatchRequest),
)
async def patch_note(
    request: Request,
    note_id: int = Depends(note_id_param),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    payload = await parse_body(request, NotePatchRequest)
    return await note_service.update_note(store, note_id, payload)


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid note ID", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int = Depends(note_id_param),
    store: NoteStore = Depends(get_note_store),
) -> MessageResponse:
    return await note_service.delete_note(store, note_id)
