"""Draft state for the open note: edit surface, preview and commits."""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from rich.console import RenderableType

from .config import PLACEHOLDER_TITLE
from .errors import NoteNotFound
from .highlight import EditSurface
from .models import Note
from .render import render_preview
from .services import format_tags, parse_tags
from .store import NoteStore

_LOG = logging.getLogger(__name__)

TEMPLATE = """# Heading 1

**Bold**, *Italic*, `code`

- Bullet 1
- Bullet 2

```python
print("Hello, Markdown!")
```"""


class NoteEditorController:
    """Edits one note.

    Every title or body change is committed straight away; tags are only
    written by ``apply_tags``. Highlighting and preview are rebuilt whenever
    the body changes.
    """

    def __init__(self, store: NoteStore, note: Optional[Note] = None) -> None:
        self.store = store
        self.note_id: Optional[uuid.UUID] = None
        self.title_draft = ""
        self.body_draft = ""
        self.tag_field_draft = ""
        self.is_pinned = False
        self.closed = False
        self.surface = EditSurface()
        self.preview: RenderableType = render_preview("")
        if note is not None:
            self.load(note)

    def load(self, note: Note) -> None:
        self.note_id = note.id
        self.title_draft = note.title
        self.body_draft = note.content or ""
        self.tag_field_draft = format_tags(note.tags)
        self.is_pinned = note.is_pinned
        self.closed = False
        self.surface = EditSurface(self.body_draft)
        self.preview = render_preview(self.body_draft)

    # ---------- draft edits ----------
    def set_title(self, text: str) -> Optional[Note]:
        self.title_draft = text
        return self.commit()

    def set_body(self, text: str) -> Optional[Note]:
        self.body_draft = text
        self.surface.update(text)
        self.preview = render_preview(text)
        return self.commit()

    def set_tag_field(self, text: str) -> None:
        self.tag_field_draft = text

    # ---------- commits ----------
    def commit(self, extra: Optional[Callable[[Note], None]] = None) -> Optional[Note]:
        """Write the title and body drafts back to the store."""
        title = self.title_draft or PLACEHOLDER_TITLE
        body = self.body_draft

        def write(note: Note) -> None:
            note.title = title
            note.content = body
            if extra is not None:
                extra(note)

        return self._write(write)

    def apply_tags(self) -> Optional[Note]:
        tags = parse_tags(self.tag_field_draft)
        return self.commit(lambda note: note.set_tags(tags))

    def toggle_pin(self) -> Optional[Note]:
        def flip(note: Note) -> None:
            note.is_pinned = not note.is_pinned

        return self.commit(flip)

    def insert_template(self) -> Optional[Note]:
        separator = "\n\n" if self.body_draft else ""
        return self.set_body(self.body_draft + separator + TEMPLATE)

    def delete(self) -> None:
        if self.note_id is None or self.closed:
            return
        try:
            self.store.delete(self.note_id)
        except NoteNotFound:
            _LOG.debug("Note %s already deleted", self.note_id)
        self.closed = True

    def _write(self, mutator: Callable[[Note], None]) -> Optional[Note]:
        if self.note_id is None or self.closed:
            _LOG.debug("No open note; edit kept in draft only")
            return None
        try:
            note = self.store.update(self.note_id, mutator)
        except NoteNotFound:
            _LOG.debug("Commit ignored, note %s is gone", self.note_id)
            return None
        if note is not None:
            self.is_pinned = note.is_pinned
        return note
