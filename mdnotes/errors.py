from __future__ import annotations


class MdNotesError(Exception):
    """Base class for mdnotes errors."""


class StoreOpenFailure(MdNotesError):
    """The note database could not be opened. Fatal at startup."""


class StoreWriteFailure(MdNotesError):
    """A commit to the note database failed; the edit may not be durable."""


class NoteNotFound(MdNotesError, LookupError):
    def __init__(self, note_id) -> None:
        super().__init__(f"Note '{note_id}' not found")
        self.note_id = note_id


class RenderFailure(MdNotesError):
    """Markdown could not be rendered; callers fall back to raw text."""
