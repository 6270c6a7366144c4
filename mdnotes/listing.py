"""State behind the note list: search box, tag strip and pinned-only toggle."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from .errors import NoteNotFound
from .models import Note
from .services import filter_notes, unique_tags
from .store import NoteStore

_LOG = logging.getLogger(__name__)


class NoteListController:
    """Holds the latest store snapshot plus ephemeral filter state.

    Derived values are recomputed on every call; the collection is small
    enough that a rescan is cheaper than keeping a cache coherent.
    """

    def __init__(self, store: NoteStore) -> None:
        self.store = store
        self.search_text = ""
        self.selected_tag: Optional[str] = None
        self.pinned_only = False
        self.notes: list[Note] = store.fetch_all()
        self._unsubscribe = store.subscribe(self._on_change)

    def _on_change(self, snapshot: list[Note]) -> None:
        self.notes = snapshot

    def close(self) -> None:
        self._unsubscribe()

    def __enter__(self) -> "NoteListController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def refresh(self) -> None:
        self.notes = self.store.fetch_all()

    # ---------- derived ----------
    def visible_notes(self) -> list[Note]:
        return filter_notes(
            self.notes,
            search_text=self.search_text,
            selected_tag=self.selected_tag,
            pinned_only=self.pinned_only,
        )

    def unique_tags(self) -> list[str]:
        return unique_tags(self.notes)

    # ---------- filter state ----------
    def select_tag(self, tag: Optional[str]) -> None:
        """Select a facet; choosing the current one again (or None) shows all."""
        self.selected_tag = None if tag is None or tag == self.selected_tag else tag

    # ---------- actions ----------
    def new_note(self) -> Optional[Note]:
        return self.store.create()

    def add_sample_data(self) -> list[Note]:
        return self.store.seed_samples()

    def delete_all(self) -> int:
        return self.store.delete_all()

    def toggle_pin(self, note_id: uuid.UUID | str) -> Optional[Note]:
        def flip(note: Note) -> None:
            note.is_pinned = not note.is_pinned

        try:
            return self.store.update(note_id, flip)
        except NoteNotFound:
            _LOG.debug("Pin toggle ignored, note %s is gone", note_id)
            return None

    def delete(self, note_id: uuid.UUID | str) -> None:
        try:
            self.store.delete(note_id)
        except NoteNotFound:
            _LOG.debug("Delete ignored, note %s is gone", note_id)
