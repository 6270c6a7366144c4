from __future__ import annotations
from datetime import datetime, UTC
from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .config import PLACEHOLDER_TITLE


class Note(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = PLACEHOLDER_TITLE
    content: Optional[str] = ""
    # tags are split on commas, so they never contain one
    tags_csv: str = ""

    is_pinned: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)

    @property
    def tags(self) -> list[str]:
        if not self.tags_csv:
            return []
        return [t for t in self.tags_csv.split(",") if t]

    def set_tags(self, tags: list[str] | None) -> None:
        if not tags:
            self.tags_csv = ""
            return
        self.tags_csv = ",".join(t for t in tags if t)

    def touch(self) -> None:
        self.updated_at = datetime.now(UTC)
