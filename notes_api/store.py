"""
Notes API - In-Memory Note Store
=================================

What:  Thread-safe, process-local storage for notes with auto-incrementing ids.
Why:   The service has no database; this store is the single owner of every
       note and of the id sequence for the lifetime of the process.
How:   A dict keyed by id, guarded by a reader/writer lock. Reads hand out
       copies, so nothing outside the store can mutate stored notes.
Who:   Created once per application by create_app(); injected into routes
       through the `get_note_store` FastAPI dependency.

Locking Discipline:
    create / update_partial / delete  → exclusive (write) lock
    get_by_id / get_all / count       → shared (read) lock

    No I/O happens while the lock is held, so every operation completes
    in bounded time.

Id Assignment:
    Ids start at 1 and increase by 1 on every create. Deleting a note does
    not return its id to the pool; a deleted id is never assigned again.
"""

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Dict, Iterator, List, Optional

from fastapi import Request

from notes_api.exceptions import NotFoundError
from notes_api.models.note import Note, NoteUpdate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReadWriteLock:
    """
    Reader/writer lock built on a single `threading.Condition`.

    Any number of readers may hold the lock together; a writer holds it
    alone. Readers arriving while a writer is waiting queue behind it, so
    a steady stream of reads cannot starve mutations.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class NoteStore:
    """
    In-memory CRUD store for notes.

    The only error raised is NotFoundError (id absent). The store does not
    validate titles; that is the service layer's job.

    Args:
        lock:  Reader/writer lock guarding the map (a fresh one by default)
        clock: Returns the current time for created_at/updated_at
    """

    def __init__(
        self,
        lock: Optional[ReadWriteLock] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._lock = lock or ReadWriteLock()
        self._clock = clock
        self._notes: Dict[int, Note] = {}
        self._next_id = 1

    def create(self, note: Note) -> int:
        """
        Store a copy of `note` under the next id and return that id.

        Any id or timestamps on the input are overwritten: the store assigns
        the id, stamps created_at, and clears updated_at.
        """
        with self._lock.write_lock():
            note_id = self._next_id
            self._notes[note_id] = note.model_copy(
                update={
                    "id": note_id,
                    "created_at": self._clock(),
                    "updated_at": None,
                }
            )
            self._next_id += 1
        return note_id

    def get_by_id(self, note_id: int) -> Note:
        """Return a copy of the note, or raise NotFoundError."""
        with self._lock.read_lock():
            note = self._notes.get(note_id)
            if note is None:
                raise NotFoundError(resource_id=note_id)
            return note.model_copy()

    def get_all(self) -> List[Note]:
        """Return copies of every stored note (empty list when the store is empty)."""
        with self._lock.read_lock():
            return [note.model_copy() for note in self._notes.values()]

    def count(self) -> int:
        with self._lock.read_lock():
            return len(self._notes)

    def update_partial(self, note_id: int, update: NoteUpdate) -> None:
        """
        Apply the present fields of `update` to the stored note.

        Rules:
            - title:   overwritten only when present and non-empty
            - content: overwritten whenever present (empty string included)
            - updated_at: always set to now, even if no value changed

        Raises:
            NotFoundError: no note with this id
        """
        with self._lock.write_lock():
            note = self._notes.get(note_id)
            if note is None:
                raise NotFoundError(resource_id=note_id)

            if update.title:
                note.title = update.title
            if update.content is not None:
                note.content = update.content
            note.updated_at = self._clock()

    def delete(self, note_id: int) -> None:
        """Remove the note, or raise NotFoundError. The id is not reused."""
        with self._lock.write_lock():
            if note_id not in self._notes:
                raise NotFoundError(resource_id=note_id)
            del self._notes[note_id]


# ── Store Dependency ──────────────────────────────────────────────────────
def get_note_store(request: Request) -> NoteStore:
    """
    FastAPI dependency returning the application's NoteStore.

    The store lives on `app.state.note_store` (set by create_app), so each
    application instance, and each test client, has its own notes.
    """
    return request.app.state.note_store
