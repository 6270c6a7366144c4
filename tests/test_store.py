from datetime import datetime, timedelta, UTC

import pytest
from sqlalchemy.exc import OperationalError

from mdnotes import db
from mdnotes.errors import NoteNotFound, StoreOpenFailure
from mdnotes.models import Note
from mdnotes.schemas import NoteCreate
from mdnotes.store import NoteStore


def test_create_applies_defaults(store):
    note = store.create()
    assert note.id is not None
    assert note.title == "Untitled"
    assert note.content == ""
    assert note.tags == []
    assert note.is_pinned is False


def test_create_with_fields_keeps_tag_order_and_duplicates(store):
    note = store.create(NoteCreate(title="hello", content="world", tags=["work", "ideas", "work"]))
    again = store.get(note.id)
    assert again.title == "hello"
    assert again.content == "world"
    assert again.tags == ["work", "ideas", "work"]


def test_pinned_note_sorts_before_newer_unpinned(store):
    t1 = datetime(2025, 8, 21, 9, 0, tzinfo=UTC)
    t2 = t1 + timedelta(hours=1)
    with store.db.session() as s:
        s.add(Note(title="A", is_pinned=False, created_at=t2, updated_at=t2))
        s.add(Note(title="B", is_pinned=True, created_at=t1, updated_at=t1))

    assert [n.title for n in store.fetch_all()] == ["B", "A"]


def test_fetch_all_sort_invariant(store):
    base = datetime(2025, 1, 1, tzinfo=UTC)
    with store.db.session() as s:
        for i, pinned in enumerate([False, True, False, True, False]):
            t = base + timedelta(minutes=i)
            s.add(Note(title=f"n{i}", is_pinned=pinned, created_at=t, updated_at=t))

    notes = store.fetch_all()
    assert [n.title for n in notes] == ["n3", "n1", "n4", "n2", "n0"]
    for a, b in zip(notes, notes[1:]):
        assert a.is_pinned >= b.is_pinned
        if a.is_pinned == b.is_pinned:
            assert a.updated_at >= b.updated_at


def test_update_applies_mutator_and_bumps_timestamp(store):
    note = store.create(NoteCreate(title="draft"))
    updated = store.update(note.id, lambda n: setattr(n, "title", "final"))
    assert updated.title == "final"
    assert updated.updated_at >= note.updated_at
    assert updated.created_at == note.created_at
    assert store.get(note.id).title == "final"


def test_update_moves_note_to_top(store):
    first = store.create(NoteCreate(title="first"))
    store.create(NoteCreate(title="second"))
    store.update(first.id, lambda n: setattr(n, "content", "edited"))
    assert store.fetch_all()[0].id == first.id


def test_update_and_delete_unknown_id_raise_not_found(store):
    note = store.create()
    store.delete(note.id)
    with pytest.raises(NoteNotFound):
        store.update(note.id, lambda n: None)
    with pytest.raises(NoteNotFound):
        store.delete(note.id)
    with pytest.raises(NoteNotFound):
        store.delete("not-a-uuid")


def test_delete_and_delete_all(store):
    a = store.create(NoteCreate(title="A"))
    store.create(NoteCreate(title="B"))
    store.create(NoteCreate(title="C"))

    store.delete(a.id)
    assert store.get(a.id) is None
    assert store.delete_all() == 2
    assert store.fetch_all() == []


def test_seed_samples(store):
    created = store.seed_samples()
    assert [n.title for n in created] == ["SwiftUI Tips", "Groceries", "Daily Journal"]
    assert store.get(created[0].id).tags == ["swift", "ui"]
    assert len(store.fetch_all()) == 3


def test_resolve_by_prefix(store):
    note = store.create(NoteCreate(title="find me"))
    assert store.resolve(str(note.id)).id == note.id
    assert store.resolve(note.id.hex[:12]).id == note.id
    with pytest.raises(NoteNotFound):
        store.resolve("zzzz")


def test_notifications_follow_mutation_order(store):
    seen = []
    unsubscribe = store.subscribe(lambda snapshot: seen.append([n.title for n in snapshot]))

    a = store.create(NoteCreate(title="A"))
    store.update(a.id, lambda n: setattr(n, "title", "A2"))
    store.delete(a.id)
    unsubscribe()
    store.create(NoteCreate(title="B"))

    assert seen == [["A"], ["A2"], []]


def test_write_failure_is_logged_and_tolerated(store, monkeypatch, caplog):
    seen = []
    store.subscribe(seen.append)

    def broken_scope():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(store.db, "session", broken_scope)
    with caplog.at_level("ERROR", logger="mdnotes.store"):
        assert store.create() is None
        assert store.delete_all() == 0
    assert "create failed" in caplog.text
    assert seen == []


def test_open_failure_is_fatal(tmp_path, monkeypatch):
    monkeypatch.setenv("MDNOTES_DB_PATH", str(tmp_path / "missing" / "notes.sqlite"))

    def refuse(*args, **kwargs):
        raise OperationalError("CREATE TABLE", {}, Exception("unable to open database file"))

    monkeypatch.setattr(db.SQLModel.metadata, "create_all", refuse)
    with pytest.raises(StoreOpenFailure):
        NoteStore.open()


def test_unusable_db_directory_is_fatal(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    monkeypatch.setenv("MDNOTES_DB_PATH", str(blocker / "notes.sqlite"))
    with pytest.raises(StoreOpenFailure):
        NoteStore.open()


def test_empty_title_falls_back_to_placeholder(store):
    note = store.create(NoteCreate(title=""))
    assert store.get(note.id).title == "Untitled"

    store.update(note.id, lambda n: setattr(n, "title", ""))
    assert store.get(note.id).title == "Untitled"
