"""Durable note collection backed by SQLite through SQLModel."""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from .config import PLACEHOLDER_TITLE
from .db import Database
from .errors import NoteNotFound, StoreWriteFailure
from .models import Note
from .schemas import NoteCreate, SAMPLE_NOTES

_LOG = logging.getLogger(__name__)

Listener = Callable[[list[Note]], None]


def _coerce_id(note_id: uuid.UUID | str) -> uuid.UUID:
    if isinstance(note_id, uuid.UUID):
        return note_id
    try:
        return uuid.UUID(str(note_id))
    except ValueError as exc:
        raise NoteNotFound(note_id) from exc


def _build(fields: NoteCreate) -> Note:
    note = Note(title=fields.title or PLACEHOLDER_TITLE, content=fields.content, is_pinned=fields.is_pinned)
    note.set_tags(fields.tags)
    return note


class NoteStore:
    """Sole owner of the note collection.

    Every mutation commits before returning and then notifies subscribers with
    a fresh ``fetch_all()`` snapshot, in mutation order. Commit failures are
    logged and tolerated; the mutation simply has no effect.
    """

    def __init__(self, database: Optional[Database] = None) -> None:
        self.db = database or Database()
        self._listeners: list[Listener] = []

    @classmethod
    def open(cls, database: Optional[Database] = None) -> "NoteStore":
        """Create tables if needed. Raises StoreOpenFailure when that fails."""
        db = database or Database()
        db.initialise()
        return cls(db)

    def close(self) -> None:
        self._listeners.clear()
        self.db.dispose()

    # ---------- notifications ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.fetch_all()
        for listener in list(self._listeners):
            listener(snapshot)

    def _write_failed(self, action: str, exc: Exception) -> None:
        failure = StoreWriteFailure(f"{action} failed: {exc}")
        _LOG.error("%s; change kept in memory only", failure, exc_info=exc)

    # ---------- reads ----------
    def fetch_all(self) -> list[Note]:
        """All notes, pinned first, then most recently updated first."""
        try:
            with self.db.session() as s:
                stmt = select(Note).order_by(Note.is_pinned.desc(), Note.updated_at.desc())
                return list(s.exec(stmt))
        except SQLAlchemyError as exc:
            _LOG.error("Fetching notes failed: %s", exc)
            return []

    def get(self, note_id: uuid.UUID | str) -> Optional[Note]:
        try:
            key = _coerce_id(note_id)
        except NoteNotFound:
            return None
        with self.db.session() as s:
            return s.get(Note, key)

    def resolve(self, identifier: str) -> Note:
        """Find a note by full id or unique id prefix."""
        note = self.get(identifier)
        if note:
            return note
        prefix = identifier.strip().lower()
        if prefix:
            hits = [n for n in self.fetch_all() if n.id.hex.startswith(prefix.replace("-", ""))]
            if len(hits) == 1:
                return hits[0]
        raise NoteNotFound(identifier)

    # ---------- writes ----------
    def create(self, fields: Optional[NoteCreate] = None) -> Optional[Note]:
        note = _build(fields or NoteCreate())
        try:
            with self.db.session() as s:
                s.add(note)
                s.flush()
                s.refresh(note)
        except SQLAlchemyError as exc:
            self._write_failed("create", exc)
            return None
        _LOG.info("Created note %s", note.id)
        self._notify()
        return note

    def seed_samples(self, samples: Iterable[NoteCreate] = SAMPLE_NOTES) -> list[Note]:
        notes = [_build(fields) for fields in samples]
        try:
            with self.db.session() as s:
                s.add_all(notes)
                s.flush()
                for note in notes:
                    s.refresh(note)
        except SQLAlchemyError as exc:
            self._write_failed("seed", exc)
            return []
        _LOG.info("Seeded %d sample notes", len(notes))
        self._notify()
        return notes

    def update(self, note_id: uuid.UUID | str, mutator: Callable[[Note], None]) -> Optional[Note]:
        """Apply ``mutator`` to the stored note and bump its ``updated_at``.

        Raises NoteNotFound when the id is unknown. Returns None when the
        commit fails.
        """
        key = _coerce_id(note_id)
        try:
            with self.db.session() as s:
                note = s.get(Note, key)
                if note is None:
                    raise NoteNotFound(note_id)
                mutator(note)
                if not note.title:
                    note.title = PLACEHOLDER_TITLE
                note.touch()
                s.add(note)
                s.flush()
                s.refresh(note)
        except SQLAlchemyError as exc:
            self._write_failed(f"update of {note_id}", exc)
            return None
        _LOG.debug("Updated note %s", note.id)
        self._notify()
        return note

    def delete(self, note_id: uuid.UUID | str) -> None:
        key = _coerce_id(note_id)
        try:
            with self.db.session() as s:
                note = s.get(Note, key)
                if note is None:
                    raise NoteNotFound(note_id)
                s.delete(note)
        except SQLAlchemyError as exc:
            self._write_failed(f"delete of {note_id}", exc)
            return
        _LOG.info("Deleted note %s", note_id)
        self._notify()

    def delete_all(self) -> int:
        try:
            with self.db.session() as s:
                notes = list(s.exec(select(Note)))
                for note in notes:
                    s.delete(note)
                removed = len(notes)
        except SQLAlchemyError as exc:
            self._write_failed("delete all", exc)
            return 0
        _LOG.info("Deleted all notes (%d)", removed)
        self._notify()
        return removed
