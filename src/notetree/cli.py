"""CLI for notetree: manage folders and notes, format text, preview."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from notetree.config import resolve_data_directory
from notetree.core.editor.engine import apply_transformation
from notetree.core.editor.toolbar import TOOLBAR, get_operation
from notetree.core.preview import render_preview
from notetree.core.tree.markdown import render_tree_as_markdown
from notetree.core.workspace import Workspace
from notetree.logging_config import configure_logging
from notetree.models.note import SelectionRange
from notetree.storage import FileStorage

app = typer.Typer(help="notetree: markdown notes in nested folders.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Notes data directory"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_workspace(data_dir: Path | None) -> Workspace:
    """Open and load the workspace of the data directory."""
    dst = data_dir or resolve_data_directory()
    try:
        dst.mkdir(parents=True, exist_ok=True)
        workspace = Workspace(FileStorage(dst))
        workspace.load()
    except OSError as e:
        raise _fail("Cannot open data directory {}: {}", dst, e) from None
    return workspace


def _fail(message: str, *args: object) -> typer.Exit:
    logger.error(message, *args)
    return typer.Exit(1)


@app.command()
def tree(
    data_dir: DataDirOption = None,
    folder: Annotated[
        str | None,
        typer.Option("--folder", "-f", help="Only show the contents of this folder"),
    ] = None,
    show_ids: bool = typer.Option(False, "--ids", "-i", help="Show ids"),
) -> None:
    """Print folders and notes as a markdown outline."""
    ws = _open_workspace(data_dir)
    if folder is not None and ws.get_folder(folder) is None:
        raise _fail("Folder not found: {}", folder)
    md = render_tree_as_markdown(ws.folders, ws.notes, root_id=folder, show_ids=show_ids)
    typer.echo(md or "No notes yet.")


@app.command()
def notes(
    data_dir: DataDirOption = None,
    folder: Annotated[
        str | None,
        typer.Option("--folder", "-f", help="Only list notes directly in this folder"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List notes, newest first."""
    ws = _open_workspace(data_dir)
    selected = ws.notes_by_folder(folder) if folder is not None else ws.notes
    if output_json:
        data = {"notes": [n.to_dict() for n in selected], "count": len(selected)}
        typer.echo(json.dumps(data, indent=2))
        return
    typer.echo(f"{len(selected)} notes:\n")
    for n in selected:
        typer.echo(f"  {n.title}  [id={n.id}]")


@app.command(name="new-note")
def new_note(
    title: str = typer.Argument(..., help="Note title"),
    folder: Annotated[
        str | None,
        typer.Option("--folder", "-f", help="Folder id to create the note in"),
    ] = None,
    content: str = typer.Option("", "--content", "-c", help="Note content"),
    from_file: Annotated[
        Path | None,
        typer.Option("--from-file", help="Read the content from a file"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Create and save a note."""
    ws = _open_workspace(data_dir)
    if folder is not None:
        if ws.get_folder(folder) is None:
            raise _fail("Folder not found: {}", folder)
        ws.select_folder(folder)

    ws.new_note()
    ws.draft_title = title
    ws.draft_content = from_file.read_text(encoding="utf-8") if from_file else content
    saved = ws.save_note()
    if saved is None:
        raise _fail("Could not save note {!r}", title)
    typer.echo(saved.id)


@app.command(name="rename-note")
def rename_note(
    note_id: str = typer.Argument(..., help="Note id"),
    title: str = typer.Argument(..., help="New title"),
    data_dir: DataDirOption = None,
) -> None:
    """Rename a note. Blank titles are ignored."""
    ws = _open_workspace(data_dir)
    if ws.get_note(note_id) is None:
        raise _fail("Note not found: {}", note_id)
    if not title.strip():
        typer.echo("Title is blank, nothing changed.")
        return
    if not ws.rename_note(note_id, title):
        raise _fail("Could not rename note {}", note_id)


@app.command(name="delete-note")
def delete_note(
    note_id: str = typer.Argument(..., help="Note id"),
    data_dir: DataDirOption = None,
) -> None:
    """Delete a note."""
    ws = _open_workspace(data_dir)
    if not ws.delete_note(note_id):
        raise _fail("Could not delete note {}", note_id)


@app.command(name="new-folder")
def new_folder(
    parent: Annotated[
        str | None,
        typer.Option("--parent", "-p", help="Parent folder id (default: root)"),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Folder name (default: a free 'New Folder' name)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Create a folder."""
    ws = _open_workspace(data_dir)
    folder = ws.create_folder(parent, name)
    if folder is None:
        raise _fail("Could not create folder")
    typer.echo(f"{folder.name}  [id={folder.id}]")


@app.command(name="rename-folder")
def rename_folder(
    folder_id: str = typer.Argument(..., help="Folder id"),
    name: str = typer.Argument(..., help="New name"),
    data_dir: DataDirOption = None,
) -> None:
    """Rename a folder. Blank names are ignored."""
    ws = _open_workspace(data_dir)
    if ws.get_folder(folder_id) is None:
        raise _fail("Folder not found: {}", folder_id)
    if not name.strip():
        typer.echo("Name is blank, nothing changed.")
        return
    if not ws.rename_folder(folder_id, name):
        raise _fail("Could not rename folder {}", folder_id)


@app.command(name="delete-folder")
def delete_folder(
    folder_id: str = typer.Argument(..., help="Folder id"),
    data_dir: DataDirOption = None,
) -> None:
    """Delete a folder with everything below it."""
    ws = _open_workspace(data_dir)
    before_folders, before_notes = len(ws.folders), len(ws.notes)
    if not ws.delete_folder(folder_id):
        raise _fail("Could not delete folder {}", folder_id)
    typer.echo(
        f"Deleted {before_folders - len(ws.folders)} folders "
        f"and {before_notes - len(ws.notes)} notes"
    )


@app.command()
def operations() -> None:
    """List the toolbar operations."""
    for name in TOOLBAR:
        typer.echo(name)


@app.command(name="format")
def format_cmd(
    operation: str = typer.Argument(..., help="Toolbar operation, see 'operations'"),
    file: Path = typer.Argument(..., help="Text file to format"),
    start: int = typer.Option(0, "--start", "-s", help="Selection start offset"),
    end: Annotated[
        int | None,
        typer.Option("--end", "-e", help="Selection end offset (default: start)"),
    ] = None,
    write: bool = typer.Option(False, "--write", "-w", help="Save the result to the file"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Apply a toolbar operation to a file at the given selection."""
    try:
        transformer = get_operation(operation)
    except KeyError as e:
        raise _fail("{}", e.args[0]) from None
    if not file.is_file():
        raise _fail("File not found: {}", file)

    buffer = file.read_text(encoding="utf-8")
    selection = SelectionRange(start, start if end is None else end)
    result = apply_transformation(buffer, selection, transformer)

    if write:
        file.write_text(result.value, encoding="utf-8")

    if output_json:
        data = {
            "value": result.value,
            "selectionStart": result.selection_start,
            "selectionEnd": result.selection_end,
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(result.value)
        typer.echo(f"\nselection: {result.selection_start}-{result.selection_end}", err=True)


@app.command()
def preview(
    note_id: str = typer.Argument(..., help="Note id"),
    raw: bool = typer.Option(False, "--raw", "-r", help="Print the markdown source"),
    data_dir: DataDirOption = None,
) -> None:
    """Print a note rendered as sanitized HTML."""
    ws = _open_workspace(data_dir)
    note = ws.get_note(note_id)
    if note is None:
        raise _fail("Note not found: {}", note_id)
    typer.echo(render_preview(note.content, "raw" if raw else "rendered"))
