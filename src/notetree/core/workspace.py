"""The note workspace: in-memory folders and notes plus their persistence.

The workspace holds the flat note and folder collections, the open note
with its unsaved draft, the selected folder, and the set of expanded
folders. Every mutation writes to storage first and only then updates
memory, so what is in memory is what was persisted.
"""

import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, replace

from loguru import logger

from notetree.config import NOTES_NAMESPACE, UNTITLED_NOTE, folder_index_path, note_path
from notetree.core.importer.json_reader import dump_folder_index, dump_note
from notetree.core.importer.loader import LoadStats, load_all
from notetree.core.tree.navigation import (
    descendant_folder_ids,
    folders_by_parent,
    notes_by_folder,
    unique_folder_name,
)
from notetree.models.note import Folder, Note
from notetree.protocols import StorageProtocol


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class WorkspaceSnapshot:
    """What the host re-renders after a tree operation."""

    folders: tuple[Folder, ...]
    notes: tuple[Note, ...]
    open_note: Note | None
    current_folder_id: str | None


class Workspace:
    """Folders and notes of one data directory.

    Mutators return True when the change was persisted and applied, and
    False when it was rejected (blank name, unknown id) or storage failed.
    Storage failures are logged, never raised.
    """

    def __init__(self, storage: StorageProtocol) -> None:
        self.storage = storage
        self.notes: list[Note] = []
        self.folders: list[Folder] = []
        self.open_note: Note | None = None
        self.draft_title = ""
        self.draft_content = ""
        self.current_folder_id: str | None = None
        self.expanded_folders: set[str] = set()

    # --- Loading ---

    def load(self) -> LoadStats:
        """Create the notes namespace if needed and read everything."""
        self.storage.ensure_container(NOTES_NAMESPACE)
        notes, folders, stats = load_all(self.storage)
        self.notes = notes
        self.folders = folders
        return stats

    def snapshot(self) -> WorkspaceSnapshot:
        return WorkspaceSnapshot(
            folders=tuple(self.folders),
            notes=tuple(self.notes),
            open_note=self.open_note,
            current_folder_id=self.current_folder_id,
        )

    # --- Lookups ---

    def get_note(self, note_id: str) -> Note | None:
        return next((n for n in self.notes if n.id == note_id), None)

    def get_folder(self, folder_id: str) -> Folder | None:
        return next((f for f in self.folders if f.id == folder_id), None)

    def folders_by_parent(self, parent_id: str | None) -> list[Folder]:
        return folders_by_parent(self.folders, parent_id)

    def notes_by_folder(self, folder_id: str | None) -> list[Note]:
        return notes_by_folder(self.notes, folder_id)

    # --- Open note and draft ---

    def new_note(self) -> Note:
        """Open a fresh, unsaved note in the selected folder."""
        note = Note(
            id=_new_id(),
            title="",
            content="",
            created_at=_now_ms(),
            folder_id=self.current_folder_id,
        )
        self.open_note = note
        self.draft_title = ""
        self.draft_content = ""
        return note

    def open_note_by_id(self, note_id: str) -> Note | None:
        """Open a saved note and copy it into the draft."""
        note = self.get_note(note_id)
        if note is None:
            logger.warning("Cannot open unknown note {}", note_id)
            return None
        self.open_note = note
        self.draft_title = note.title
        self.draft_content = note.content
        return note

    def close_note(self) -> None:
        self.open_note = None
        self.draft_title = ""
        self.draft_content = ""

    def save_note(self) -> Note | None:
        """Persist the open note with the current draft.

        A blank title is saved as "Untitled Note". Returns the saved note,
        or None if nothing is open or the write failed.
        """
        if self.open_note is None:
            return None

        note = replace(
            self.open_note,
            title=self.draft_title.strip() or UNTITLED_NOTE,
            content=self.draft_content,
        )
        if not self._write_note(note):
            return None

        self.notes = [n for n in self.notes if n.id != note.id]
        self.notes.append(note)
        self.notes.sort(key=lambda n: n.created_at, reverse=True)
        self.open_note = note
        self.draft_title = note.title
        logger.info("Saved note {} ({!r})", note.id, note.title)
        return note

    # --- Folder selection ---

    def select_folder(self, folder_id: str | None) -> None:
        if folder_id is not None and self.get_folder(folder_id) is None:
            logger.warning("Cannot select unknown folder {}", folder_id)
            return
        self.current_folder_id = folder_id

    def toggle_folder(self, folder_id: str) -> bool:
        """Expand or collapse a folder. Returns True if it is now expanded.

        Expanding selects the folder; collapsing the selected folder resets
        the selection to the root.
        """
        if folder_id in self.expanded_folders:
            self.expanded_folders.discard(folder_id)
            if self.current_folder_id == folder_id:
                self.current_folder_id = None
            return False
        self.expanded_folders.add(folder_id)
        self.select_folder(folder_id)
        return True

    # --- Renames ---

    def rename_note(self, note_id: str, new_title: str) -> bool:
        title = new_title.strip()
        if not title:
            return False
        note = self.get_note(note_id)
        if note is None:
            logger.warning("Cannot rename unknown note {}", note_id)
            return False

        renamed = replace(note, title=title)
        if not self._write_note(renamed):
            return False

        self._replace_note(renamed)
        if self.open_note is not None and self.open_note.id == note_id:
            self.open_note = renamed
            self.draft_title = title
        logger.debug("Renamed note {} to {!r}", note_id, title)
        return True

    def rename_folder(self, folder_id: str, new_name: str) -> bool:
        name = new_name.strip()
        if not name:
            return False
        if self.get_folder(folder_id) is None:
            logger.warning("Cannot rename unknown folder {}", folder_id)
            return False

        folders = [replace(f, name=name) if f.id == folder_id else f for f in self.folders]
        if not self._write_folders(folders):
            return False

        self.folders = folders
        logger.debug("Renamed folder {} to {!r}", folder_id, name)
        return True

    # --- Creation ---

    def create_folder(self, parent_id: str | None = None, name: str | None = None) -> Folder | None:
        """Create a folder under parent_id.

        Without a name (or with a blank one) the default name is used,
        de-duplicated among the new folder's siblings.
        """
        if parent_id is not None and self.get_folder(parent_id) is None:
            logger.warning("Cannot create folder under unknown folder {}", parent_id)
            return None

        base = (name or "").strip()
        folder = Folder(
            id=_new_id(),
            name=base or unique_folder_name(self.folders, parent_id),
            parent_id=parent_id,
            created_at=_now_ms(),
        )
        folders = [*self.folders, folder]
        if not self._write_folders(folders):
            return None

        self.folders = folders
        logger.info("Created folder {} ({!r})", folder.id, folder.name)
        return folder

    # --- Deletes ---

    def delete_note(self, note_id: str) -> bool:
        """Delete a note from storage and memory.

        A note without a persisted blob (never saved) is just dropped. On
        any other storage error the note is kept.
        """
        is_open = self.open_note is not None and self.open_note.id == note_id
        if self.get_note(note_id) is None and not is_open:
            logger.warning("Cannot delete unknown note {}", note_id)
            return False
        if not self._delete_note_blob(note_id):
            return False

        self.notes = [n for n in self.notes if n.id != note_id]
        if self.open_note is not None and self.open_note.id == note_id:
            self.close_note()
        logger.info("Deleted note {}", note_id)
        return True

    def delete_folder(self, folder_id: str) -> bool:
        """Delete a folder, all folders below it, and every note inside them.

        Note blobs go first. If any of them cannot be deleted, those notes
        and the whole folder subtree stay, so nothing in storage is left
        pointing at a missing folder; the call can be retried.
        """
        if self.get_folder(folder_id) is None:
            logger.warning("Cannot delete unknown folder {}", folder_id)
            return False

        doomed_folders = descendant_folder_ids(self.folders, folder_id)
        doomed_notes = [n.id for n in self.notes if n.folder_id in doomed_folders]

        deleted_notes = {note_id for note_id in doomed_notes if self._delete_note_blob(note_id)}
        self._forget_notes(deleted_notes)
        if len(deleted_notes) != len(doomed_notes):
            logger.error(
                "Folder {} kept: {} of {} notes could not be deleted",
                folder_id, len(doomed_notes) - len(deleted_notes), len(doomed_notes),
            )
            return False

        folders = [f for f in self.folders if f.id not in doomed_folders]
        if not self._write_folders(folders):
            return False

        self.folders = folders
        self.expanded_folders -= doomed_folders
        # An unsaved note has no blob but still lives in the deleted folder.
        if self.open_note is not None and self.open_note.folder_id in doomed_folders:
            self.close_note()
        if self.current_folder_id in doomed_folders:
            self.current_folder_id = None
        logger.info(
            "Deleted folder {} ({} folders, {} notes)",
            folder_id, len(doomed_folders), len(deleted_notes),
        )
        return True

    # --- Storage helpers ---

    def _replace_note(self, note: Note) -> None:
        self.notes = [note if n.id == note.id else n for n in self.notes]

    def _forget_notes(self, note_ids: set[str]) -> None:
        if not note_ids:
            return
        self.notes = [n for n in self.notes if n.id not in note_ids]
        if self.open_note is not None and self.open_note.id in note_ids:
            self.close_note()

    def _write_note(self, note: Note) -> bool:
        try:
            self.storage.write_text(note_path(note.id), dump_note(note))
        except OSError:
            logger.exception("Failed to write note {}", note.id)
            return False
        return True

    def _write_folders(self, folders: Sequence[Folder]) -> bool:
        try:
            self.storage.write_text(folder_index_path(), dump_folder_index(list(folders)))
        except OSError:
            logger.exception("Failed to write folder index")
            return False
        return True

    def _delete_note_blob(self, note_id: str) -> bool:
        try:
            self.storage.delete_entry(note_path(note_id))
        except FileNotFoundError:
            logger.debug("Note {} has no stored blob", note_id)
        except OSError:
            logger.exception("Failed to delete note {}", note_id)
            return False
        return True
