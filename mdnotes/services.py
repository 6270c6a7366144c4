from __future__ import annotations
from typing import Iterable, Optional

from .models import Note


def parse_tags(field: str | None) -> list[str]:
    """Split a comma separated tag field; trims, drops empties, keeps order and duplicates."""
    if not field:
        return []
    return [t.strip() for t in field.split(",") if t.strip()]


def format_tags(tags: Optional[Iterable[str]]) -> str:
    return ", ".join(tags or [])


def matches(
    note: Note,
    *,
    search_text: str = "",
    selected_tag: Optional[str] = None,
    pinned_only: bool = False,
) -> bool:
    if pinned_only and not note.is_pinned:
        return False
    # exact, case-sensitive facet match
    if selected_tag is not None and selected_tag not in note.tags:
        return False
    if search_text:
        hay = (note.title + "\n" + (note.content or "")).lower()
        if search_text.lower() not in hay:
            return False
    return True


def filter_notes(
    notes: Iterable[Note],
    *,
    search_text: str = "",
    selected_tag: Optional[str] = None,
    pinned_only: bool = False,
) -> list[Note]:
    """
    Return the notes passing every active predicate, in their original order.
    - pinned_only: keep pinned notes only
    - selected_tag: note tags must contain it
    - search_text: case-insensitive substring of title + content
    """
    return [
        n
        for n in notes
        if matches(n, search_text=search_text, selected_tag=selected_tag, pinned_only=pinned_only)
    ]


def unique_tags(notes: Iterable[Note]) -> list[str]:
    return sorted({t for n in notes for t in n.tags})


def snippet(note: Note) -> str:
    for line in (note.content or "").split("\n"):
        if line:
            return line
    return ""
