"""Render the folder/note forest as a markdown outline."""

import io
from collections.abc import Collection, Sequence

from notetree.config import UNTITLED_NOTE
from notetree.core.tree.navigation import folders_by_parent, notes_by_folder
from notetree.models.note import Folder, Note


def render_tree_as_markdown(
    folders: Sequence[Folder],
    notes: Sequence[Note],
    *,
    root_id: str | None = None,
    expanded: Collection[str] | None = None,
    show_ids: bool = False,
) -> str:
    """Render the contents of root_id as an indented bullet list.

    Args:
        folders: All folders.
        notes: All notes.
        root_id: Folder whose contents are rendered (None = the whole forest).
        expanded: If given, only these folders show their contents.
        show_ids: Append ``(id=...)`` to every line.

    Returns:
        Markdown with folders listed before notes at every level.
    """
    out = io.StringIO()
    # Folders already expanded; a folder reached twice through a cycle is
    # listed but not expanded again.
    visited: set[str] = set()
    if root_id is not None:
        visited.add(root_id)

    def children(parent_id: str | None, depth: int) -> list[tuple[Folder | Note, int]]:
        items: list[tuple[Folder | Note, int]] = [
            (f, depth) for f in folders_by_parent(folders, parent_id)
        ]
        items.extend((n, depth) for n in notes_by_folder(notes, parent_id))
        return items

    stack = list(reversed(children(root_id, 0)))
    while stack:
        item, depth = stack.pop()
        indent = "    " * depth
        id_suffix = f"  (id={item.id})" if show_ids else ""

        if isinstance(item, Note):
            out.write(f"{indent}- {item.title or UNTITLED_NOTE}{id_suffix}\n")
            continue

        out.write(f"{indent}- {item.name}/{id_suffix}\n")
        if item.id in visited:
            continue
        if expanded is not None and item.id not in expanded:
            continue
        visited.add(item.id)
        stack.extend(reversed(children(item.id, depth + 1)))

    return out.getvalue()
