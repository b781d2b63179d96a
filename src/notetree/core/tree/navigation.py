"""Tree queries over the flat folder and note collections.

The forest is never stored as a tree: folders and notes only point at their
parent. Every query filters the flat collections again. Traversals keep a
visited set because nothing stops a hand-edited folder index from
containing a cycle.
"""

from collections import deque
from collections.abc import Iterable, Sequence

from notetree.config import DEFAULT_FOLDER_NAME
from notetree.models.note import Folder, Note


def folders_by_parent(folders: Iterable[Folder], parent_id: str | None) -> list[Folder]:
    """Direct child folders of parent_id (None is the root)."""
    return [f for f in folders if f.parent_id == parent_id]


def notes_by_folder(notes: Iterable[Note], folder_id: str | None) -> list[Note]:
    """Notes directly inside folder_id (None is the root)."""
    return [n for n in notes if n.folder_id == folder_id]


def descendant_folder_ids(folders: Sequence[Folder], folder_id: str) -> set[str]:
    """Return folder_id plus every folder below it.

    Terminates on cyclic parent pointers: each id is expanded at most once.
    """
    visited: set[str] = set()
    todo: deque[str] = deque([folder_id])
    while todo:
        current = todo.popleft()
        if current in visited:
            continue
        visited.add(current)
        todo.extend(f.id for f in folders if f.parent_id == current and f.id not in visited)
    return visited


def unique_folder_name(
    folders: Iterable[Folder],
    parent_id: str | None,
    base: str = DEFAULT_FOLDER_NAME,
) -> str:
    """Pick a name unused among the siblings under parent_id.

    Tries base, then "base 2", "base 3", ... Names elsewhere in the tree
    do not count as collisions.
    """
    taken = {f.name for f in folders_by_parent(folders, parent_id)}
    name = base
    count = 1
    while name in taken:
        count += 1
        name = f"{base} {count}"
    return name
