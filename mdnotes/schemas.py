from __future__ import annotations

from pydantic import BaseModel, Field

from .config import PLACEHOLDER_TITLE


class NoteCreate(BaseModel):
    title: str = PLACEHOLDER_TITLE
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    is_pinned: bool = False


SAMPLE_NOTES: list[NoteCreate] = [
    NoteCreate(
        title="SwiftUI Tips",
        content="# SwiftUI\n\n- Use `@State`\n- Prefer `NavigationStack`",
        tags=["swift", "ui"],
    ),
    NoteCreate(title="Groceries", content="- Apples\n- Milk\n- Oats", tags=["life"]),
    NoteCreate(title="Daily Journal", content="## 2025-08-21\nFelt productive.", tags=["journal"]),
]
