"""
Notes API - Note Store Unit Tests
==================================

What:  Tests for NoteStore CRUD semantics and its reader/writer lock.
How:   Direct calls against a NoteStore with a fake clock; threads for the
       concurrency cases.
"""

import threading
import time
from datetime import datetime

import pytest

from notes_api.exceptions import NotFoundError
from notes_api.models.note import Note, NoteUpdate
from notes_api.store import NoteStore, ReadWriteLock


class TestNoteStoreCreate:
    """Id assignment and creation bookkeeping."""

    def test_ids_start_at_one_and_increase(self, note_store):
        ids = [note_store.create(Note(title=f"n{i}")) for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_created_note_matches_input(self, note_store):
        note_id = note_store.create(Note(title="A", content="x"))

        stored = note_store.get_by_id(note_id)

        assert stored.id == note_id
        assert stored.title == "A"
        assert stored.content == "x"
        assert isinstance(stored.created_at, datetime)
        assert stored.created_at.tzinfo is not None
        assert stored.updated_at is None

    def test_store_overrides_caller_supplied_id_and_timestamps(self, note_store, clock):
        bogus = Note(id=42, title="A", created_at=clock(), updated_at=clock())

        note_id = note_store.create(bogus)
        stored = note_store.get_by_id(note_id)

        assert note_id == 1
        assert stored.updated_at is None
        assert stored.created_at > bogus.created_at

    def test_deleted_ids_are_not_reused(self, note_store):
        assert note_store.create(Note(title="A", content="x")) == 1
        assert note_store.create(Note(title="B", content="y")) == 2
        note_store.delete(1)
        assert note_store.create(Note(title="C", content="z")) == 3

        assert {n.id for n in note_store.get_all()} == {2, 3}

    def test_input_note_is_copied(self, note_store):
        note = Note(title="original")
        note_id = note_store.create(note)

        note.title = "changed after create"

        assert note_store.get_by_id(note_id).title == "original"


class TestNoteStoreRead:
    """Lookups and value-copy semantics."""

    def test_get_missing_raises_not_found(self, note_store):
        with pytest.raises(NotFoundError):
            note_store.get_by_id(1)

    def test_returned_note_is_a_copy(self, note_store):
        note_id = note_store.create(Note(title="A", content="x"))

        copy = note_store.get_by_id(note_id)
        copy.title = "mutated"
        copy.content = "mutated"

        stored = note_store.get_by_id(note_id)
        assert stored.title == "A"
        assert stored.content == "x"

    def test_get_all_empty_returns_empty_list(self, note_store):
        assert note_store.get_all() == []

    def test_get_all_returns_copies(self, note_store):
        note_store.create(Note(title="A"))

        note_store.get_all()[0].title = "mutated"

        assert note_store.get_all()[0].title == "A"

    def test_count(self, note_store):
        assert note_store.count() == 0
        note_store.create(Note(title="A"))
        note_store.create(Note(title="B"))
        assert note_store.count() == 2


class TestNoteStoreUpdatePartial:
    """Partial update field rules and updated_at bookkeeping."""

    def test_content_only_keeps_title(self, note_store):
        note_id = note_store.create(Note(title="A", content="x"))

        note_store.update_partial(note_id, NoteUpdate(content="new"))

        stored = note_store.get_by_id(note_id)
        assert stored.title == "A"
        assert stored.content == "new"
        assert stored.updated_at is not None

    def test_title_only_keeps_content(self, note_store):
        note_id = note_store.create(Note(title="A", content="x"))

        note_store.update_partial(note_id, NoteUpdate(title="B"))

        stored = note_store.get_by_id(note_id)
        assert stored.title == "B"
        assert stored.content == "x"

    def test_empty_title_is_ignored_but_updated_at_advances(self, note_store):
        note_id = note_store.create(Note(title="A", content="x"))

        note_store.update_partial(note_id, NoteUpdate(title=""))

        stored = note_store.get_by_id(note_id)
        assert stored.title == "A"
        assert stored.content == "x"
        assert stored.updated_at is not None

    def test_empty_content_overwrites(self, note_store):
        note_id = note_store.create(Note(title="A", content="x"))

        note_store.update_partial(note_id, NoteUpdate(content=""))

        assert note_store.get_by_id(note_id).content == ""

    def test_no_fields_still_advances_updated_at(self, note_store):
        note_id = note_store.create(Note(title="A", content="x"))

        note_store.update_partial(note_id, NoteUpdate())

        assert note_store.get_by_id(note_id).updated_at is not None

    def test_updated_at_moves_forward_and_created_at_is_fixed(self, note_store):
        note_id = note_store.create(Note(title="A"))
        created_at = note_store.get_by_id(note_id).created_at

        note_store.update_partial(note_id, NoteUpdate(content="1"))
        first = note_store.get_by_id(note_id).updated_at
        note_store.update_partial(note_id, NoteUpdate(content="1"))
        second = note_store.get_by_id(note_id).updated_at

        assert created_at < first < second
        assert note_store.get_by_id(note_id).created_at == created_at

    def test_update_missing_raises_not_found(self, note_store):
        with pytest.raises(NotFoundError):
            note_store.update_partial(7, NoteUpdate(title="B"))


class TestNoteStoreDelete:

    def test_delete_then_get_raises_not_found(self, note_store):
        note_id = note_store.create(Note(title="A"))

        note_store.delete(note_id)

        with pytest.raises(NotFoundError):
            note_store.get_by_id(note_id)

    def test_delete_missing_raises_not_found(self, note_store):
        with pytest.raises(NotFoundError):
            note_store.delete(1)

    def test_double_delete_raises_not_found(self, note_store):
        note_id = note_store.create(Note(title="A"))
        note_store.delete(note_id)

        with pytest.raises(NotFoundError):
            note_store.delete(note_id)


class TestConcurrency:
    """Thread-safety of the store and the reader/writer lock."""

    def test_concurrent_creates_assign_unique_ids(self):
        store = NoteStore()
        results = []
        results_lock = threading.Lock()

        def worker():
            ids = [store.create(Note(title="t")) for _ in range(50)]
            with results_lock:
                results.extend(ids)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results) == list(range(1, 401))
        assert store.count() == 400

    def test_concurrent_updates_and_reads(self):
        store = NoteStore()
        note_id = store.create(Note(title="t", content=""))
        errors = []

        def writer(n):
            for i in range(100):
                store.update_partial(note_id, NoteUpdate(content=f"{n}-{i}"))

        def reader():
            for _ in range(100):
                try:
                    store.get_by_id(note_id)
                    store.get_all()
                except Exception as exc:  # surfaced by the assertion below
                    errors.append(exc)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert store.get_by_id(note_id).updated_at is not None

    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        second_reader_in = threading.Event()

        def second_reader():
            with lock.read_lock():
                second_reader_in.set()

        with lock.read_lock():
            t = threading.Thread(target=second_reader)
            t.start()
            assert second_reader_in.wait(timeout=2)
        t.join()

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        writer_in = threading.Event()

        def writer():
            with lock.write_lock():
                writer_in.set()

        with lock.read_lock():
            t = threading.Thread(target=writer)
            t.start()
            assert not writer_in.wait(timeout=0.2)

        assert writer_in.wait(timeout=2)
        t.join()

    def test_reader_waits_for_writer(self):
        lock = ReadWriteLock()
        reader_in = threading.Event()

        def reader():
            with lock.read_lock():
                reader_in.set()

        with lock.write_lock():
            t = threading.Thread(target=reader)
            t.start()
            assert not reader_in.wait(timeout=0.2)

        assert reader_in.wait(timeout=2)
        t.join()

    def test_waiting_writer_goes_before_new_reader(self):
        lock = ReadWriteLock()
        order = []
        writer_in = threading.Event()
        late_reader_in = threading.Event()

        def writer():
            with lock.write_lock():
                order.append("writer")
                writer_in.set()

        def late_reader():
            with lock.read_lock():
                order.append("reader")
                late_reader_in.set()

        with lock.read_lock():
            w = threading.Thread(target=writer)
            w.start()
            # wait until the writer is queued on the lock
            for _ in range(200):
                with lock._cond:
                    if lock._waiting_writers:
                        break
                time.sleep(0.01)
            assert lock._waiting_writers == 1

            r = threading.Thread(target=late_reader)
            r.start()
            assert not late_reader_in.wait(timeout=0.2)
            assert not writer_in.is_set()

        assert writer_in.wait(timeout=2)
        assert late_reader_in.wait(timeout=2)
        w.join()
        r.join()
        assert order == ["writer", "reader"]

    def test_store_uses_injected_lock(self):
        lock = ReadWriteLock()
        store = NoteStore(lock=lock)
        created = threading.Event()

        def create():
            store.create(Note(title="t"))
            created.set()

        with lock.read_lock():
            t = threading.Thread(target=create)
            t.start()
            assert not created.wait(timeout=0.2)

        assert created.wait(timeout=2)
        t.join()
