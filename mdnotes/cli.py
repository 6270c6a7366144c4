from __future__ import annotations
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table

from .config import PLACEHOLDER_TITLE
from .editor import NoteEditorController
from .errors import NoteNotFound, StoreOpenFailure
from .listing import NoteListController
from .logger import configure_logging
from .models import Note
from .render import render_preview
from .schemas import NoteCreate
from .services import parse_tags, snippet
from .store import NoteStore

app = typer.Typer(help="mdnotes: local Markdown notes")
console = Console()

_state: dict[str, NoteStore] = {}


@app.callback()
def _boot():
    previous = _state.pop("store", None)
    if previous is not None:
        previous.close()
    try:
        _state["store"] = NoteStore.open()
    except StoreOpenFailure as e:
        console.print(f"[red]Cannot open note store[/]: {e}")
        raise typer.Exit(1)


def _store() -> NoteStore:
    return _state["store"]


def _resolve(identifier: str) -> Note:
    try:
        return _store().resolve(identifier)
    except NoteNotFound:
        console.print(f"[red]Not found[/]: {identifier}")
        raise typer.Exit(1)


def _short(n: Note) -> str:
    return n.id.hex[:8]


@app.command("list")
def _list(
    search: str = typer.Option("", "--search", "-s"),
    tag: Optional[str] = typer.Option(None, "--tag"),
    pinned: bool = typer.Option(False, "--pinned", help="only pinned notes"),
):
    with NoteListController(_store()) as ctl:
        ctl.search_text = search
        ctl.select_tag(tag)
        ctl.pinned_only = pinned
        notes = ctl.visible_notes()

    table = Table(title="Notes")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="bold", no_wrap=True)
    table.add_column("Snippet", style="dim", no_wrap=True, overflow="ellipsis", max_width=20)
    table.add_column("Tags", style="magenta")
    table.add_column("Pin")
    table.add_column("Updated")
    for n in notes:
        table.add_row(
            _short(n), n.title, snippet(n), ", ".join(n.tags[:4]),
            "✓" if n.is_pinned else "",
            n.updated_at.strftime("%m-%d %H:%M"),
        )
    console.print(table)


@app.command()
def tags():
    with NoteListController(_store()) as ctl:
        found = ctl.unique_tags()
    console.print(" ".join(f"#{t}" for t in found) if found else "[dim]no tags[/]")


@app.command()
def new(
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    content: str = typer.Option("", "--content", "-c"),
    tags: Optional[str] = typer.Option(None, "--tags", "-g", help="comma separated"),
):
    fields = NoteCreate(content=content, tags=parse_tags(tags))
    if title:
        fields.title = title
    n = _store().create(fields)
    if n is None:
        console.print("[red]Could not save the note[/] (see log)")
        raise typer.Exit(1)
    console.print(f"[green]Created[/] {_short(n)}: {n.title}")


@app.command()
def sample():
    with NoteListController(_store()) as ctl:
        created = ctl.add_sample_data()
    console.print(f"[green]Added[/] {len(created)} sample notes")


@app.command()
def wipe(yes: bool = typer.Option(False, "--yes", "-y")):
    if not yes and not typer.confirm("Delete ALL notes?"):
        raise typer.Abort()
    with NoteListController(_store()) as ctl:
        removed = ctl.delete_all()
    console.print(f"[red]Deleted[/] {removed} notes")


@app.command()
def pin(identifier: str):
    n = _resolve(identifier)
    with NoteListController(_store()) as ctl:
        updated = ctl.toggle_pin(n.id)
    if updated is None:
        raise typer.Exit(1)
    console.print(f"[green]{'Pinned' if updated.is_pinned else 'Unpinned'}[/] {_short(updated)}: {updated.title}")


@app.command()
def delete(identifier: str):
    n = _resolve(identifier)
    with NoteListController(_store()) as ctl:
        ctl.delete(n.id)
    console.print(f"[yellow]Deleted[/] {_short(n)}: {n.title}")


@app.command()
def show(identifier: str, source: bool = typer.Option(False, "--source", help="highlighted Markdown source")):
    n = _resolve(identifier)
    editor = NoteEditorController(_store(), n)
    console.rule(f"{'📌 ' if n.is_pinned else ''}{n.title}")
    if n.tags:
        console.print(f"[dim]tags:[/] {', '.join(n.tags)}")
    if source:
        console.print(editor.surface.styled)
    else:
        console.print(editor.preview if editor.body_draft else render_preview("_<empty>_"))


@app.command()
def edit(
    identifier: str,
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    content: Optional[str] = typer.Option(None, "--content", "-c"),
    tags: Optional[str] = typer.Option(None, "--tags", "-g", help="comma separated"),
    template: bool = typer.Option(False, "--template", help="append the Markdown template"),
):
    editor = NoteEditorController(_store(), _resolve(identifier))
    if title is not None:
        editor.set_title(title)
    if content is not None:
        editor.set_body(content)
    if tags is not None:
        editor.set_tag_field(tags)
        editor.apply_tags()
    if template:
        editor.insert_template()
    console.print(f"[green]Updated[/] {editor.note_id.hex[:8]}: {editor.title_draft or PLACEHOLDER_TITLE}")


def main():
    configure_logging()
    app()


if __name__ == "__main__":
    main()
