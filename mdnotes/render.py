"""Markdown preview rendering with a raw-text fallback."""

from __future__ import annotations

import logging

from rich.console import Console, RenderableType
from rich.markdown import Markdown
from rich.text import Text

from .errors import RenderFailure

_LOG = logging.getLogger(__name__)

MUTED_STYLE = "dim"


def render_markdown(text: str) -> Markdown:
    """Parse ``text`` as Markdown. Raises RenderFailure when the parser does."""
    try:
        return Markdown(text, code_theme="monokai", hyperlinks=True)
    except Exception as exc:  # third-party parser errors have no common base
        raise RenderFailure(str(exc)) from exc


def render_preview(text: str) -> RenderableType:
    try:
        return render_markdown(text)
    except RenderFailure as exc:
        _LOG.warning("Markdown preview failed, showing raw text: %s", exc)
        return Text(text, style=MUTED_STYLE)


def render_to_text(renderable: RenderableType, width: int = 80) -> str:
    """Capture a renderable as plain text."""
    console = Console(width=width, color_system=None, force_terminal=False)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()
