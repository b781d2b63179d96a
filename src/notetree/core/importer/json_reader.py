"""Parse persisted note and folder-index JSON into domain models."""

import json
from typing import Any

from notetree.models.note import Folder, Note


def _optional_id(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"{field} must be a string or null, got {value!r}"
        raise ValueError(msg)
    return value


def _created_at(data: dict[str, Any], kind: str, item_id: str) -> int:
    created_at = data.get("createdAt", 0)
    if not isinstance(created_at, int) or isinstance(created_at, bool):
        msg = f"{kind} {item_id!r}: createdAt must be an integer, got {created_at!r}"
        raise ValueError(msg)
    return created_at


def parse_note_data(data: Any) -> Note:
    """Build a Note from its persisted dict.

    Older notes without ``folderId`` land at the root; a missing title or
    content is read as empty.

    Raises:
        ValueError: If required fields are missing or have the wrong type.
    """
    if not isinstance(data, dict):
        msg = f"Note must be a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    note_id = data.get("id")
    if not isinstance(note_id, str) or not note_id:
        msg = f"Note has no valid id: {note_id!r}"
        raise ValueError(msg)
    created_at = _created_at(data, "Note", note_id)

    return Note(
        id=note_id,
        title=str(data.get("title") or ""),
        content=str(data.get("content") or ""),
        created_at=created_at,
        folder_id=_optional_id(data.get("folderId"), "folderId"),
    )


def parse_folder_data(data: Any) -> Folder:
    """Build a Folder from one element of the folder index.

    Raises:
        ValueError: If required fields are missing or have the wrong type.
    """
    if not isinstance(data, dict):
        msg = f"Folder must be a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    folder_id = data.get("id")
    if not isinstance(folder_id, str) or not folder_id:
        msg = f"Folder has no valid id: {folder_id!r}"
        raise ValueError(msg)
    name = data.get("name")
    if not isinstance(name, str):
        msg = f"Folder {folder_id!r}: name must be a string, got {name!r}"
        raise ValueError(msg)

    return Folder(
        id=folder_id,
        name=name,
        parent_id=_optional_id(data.get("parentId"), "parentId"),
        created_at=_created_at(data, "Folder", folder_id),
    )


def read_note(contents: str) -> Note:
    """Parse a note blob. Raises ValueError (incl. JSONDecodeError) if malformed."""
    return parse_note_data(json.loads(contents))


def read_folder_index(contents: str) -> list[Folder]:
    """Parse the folder index blob: a JSON array of folder objects.

    Raises:
        ValueError: If the blob is not an array or any element is malformed.
    """
    data = json.loads(contents)
    if not isinstance(data, list):
        msg = f"Folder index must be a JSON array, got {type(data).__name__}"
        raise ValueError(msg)
    return [parse_folder_data(item) for item in data]


def dump_note(note: Note) -> str:
    return json.dumps(note.to_dict(), indent=2)


def dump_folder_index(folders: list[Folder]) -> str:
    return json.dumps([f.to_dict() for f in folders], indent=2)
