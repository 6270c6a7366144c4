"""Minimal Markdown highlighting for the edit surface (headings and inline code)."""

from __future__ import annotations

import re

from rich.text import Text

BASE_STYLE = "grey93"
HEADING_MARKER_STYLE = "bold cyan"
HEADING_STYLE = "bold underline bright_white"
# clears heading emphasis so code inside a heading still reads as code
CODE_STYLE = "not bold not underline yellow on grey15"

HEADING_RE = re.compile(r"(?m)^(#{1,6})[ \t]+(.*)$")
INLINE_CODE_RE = re.compile(r"`([^`]+)`")


def highlight(text: str) -> Text:
    styled = Text(text, style=BASE_STYLE)
    for m in HEADING_RE.finditer(text):
        styled.stylize(HEADING_MARKER_STYLE, m.start(1), m.end(1))
        if m.end(2) > m.start(2):
            styled.stylize(HEADING_STYLE, m.start(2), m.end(2))
    # applied last so it wins over heading styling in its range
    for m in INLINE_CODE_RE.finditer(text):
        styled.stylize(CODE_STYLE, m.start(1), m.end(1))
    return styled


class EditSurface:
    """Text plus caret/selection, restyled on every change."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.selection: tuple[int, int] = (len(text), len(text))
        self.styled = highlight(text)

    def select(self, start: int, end: int | None = None) -> None:
        self.selection = self._clamp(start, start if end is None else end)

    def update(self, text: str) -> Text:
        """Restyle for ``text`` and keep the selection where it was."""
        self.text = text
        self.styled = highlight(text)
        self.selection = self._clamp(*self.selection)
        return self.styled

    def _clamp(self, start: int, end: int) -> tuple[int, int]:
        size = len(self.text)
        start = max(0, min(start, size))
        end = max(start, min(end, size))
        return start, end
