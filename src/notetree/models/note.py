"""Domain models for the note tree and the markdown editor."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Note:
    """A single note, persisted as one JSON blob keyed by its id."""

    id: str
    title: str
    content: str
    created_at: int
    folder_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted (camelCase) shape."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at,
            "folderId": self.folder_id,
        }


@dataclass(frozen=True)
class Folder:
    """A folder. Children point at it via parent_id; it keeps no child list."""

    id: str
    name: str
    parent_id: str | None
    created_at: int

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted (camelCase) shape."""
        return {
            "id": self.id,
            "name": self.name,
            "parentId": self.parent_id,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class Entry:
    """A named item in a storage namespace."""

    name: str
    is_text_blob: bool


@dataclass(frozen=True)
class SelectionRange:
    """A caret (start == end) or a highlighted span over a text buffer."""

    start: int
    end: int

    @property
    def is_caret(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class TransformationResult:
    """New buffer plus the selection the host must restore."""

    value: str
    selection_start: int
    selection_end: int

    @property
    def selection(self) -> SelectionRange:
        return SelectionRange(self.selection_start, self.selection_end)
