"""
Notes API - Health Check Route
===============================

What:  Liveness endpoint for monitoring and container probes.
Why:   Orchestrators need a cheap way to tell whether the process is serving.
How:   Reads the store size under its shared lock; there are no external
       dependencies to probe.
"""

import time

from fastapi import APIRouter, Depends

from notes_api import __version__
from notes_api.schemas.note import HealthResponse
from notes_api.store import NoteStore, get_note_store

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_note_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        notes=store.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
