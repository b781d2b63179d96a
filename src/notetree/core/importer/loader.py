"""Load notes and the folder index from storage."""

from dataclasses import dataclass

from loguru import logger

from notetree.config import FOLDER_INDEX_NAME, NOTE_SUFFIX, NOTES_NAMESPACE, folder_index_path
from notetree.core.importer.json_reader import read_folder_index, read_note
from notetree.models.note import Folder, Note
from notetree.protocols import StorageProtocol


@dataclass(frozen=True)
class LoadStats:
    """Summary of a load operation."""

    notes_loaded: int
    notes_skipped: int
    folders_loaded: int


def load_notes(storage: StorageProtocol) -> tuple[list[Note], int]:
    """Load every note blob in the notes namespace, newest first.

    A blob that cannot be read or parsed is logged and skipped; the rest
    still load.

    Returns:
        Tuple of (notes, number of skipped blobs).
    """
    notes: list[Note] = []
    skipped = 0

    for entry in storage.list_entries(NOTES_NAMESPACE):
        if not entry.is_text_blob or not entry.name.endswith(NOTE_SUFFIX):
            continue
        if entry.name == FOLDER_INDEX_NAME:
            continue
        try:
            contents = storage.read_text(f"{NOTES_NAMESPACE}/{entry.name}")
            notes.append(read_note(contents))
        except (OSError, ValueError) as e:
            logger.warning("Skipping note {}: {}", entry.name, e)
            skipped += 1

    notes.sort(key=lambda n: n.created_at, reverse=True)
    return notes, skipped


def load_folders(storage: StorageProtocol) -> list[Folder]:
    """Load the folder index. A missing index is an empty collection.

    Raises:
        ValueError: If the index exists but is malformed.
    """
    try:
        contents = storage.read_text(folder_index_path())
    except FileNotFoundError:
        logger.debug("No folder index yet")
        return []
    return read_folder_index(contents)


def load_all(storage: StorageProtocol) -> tuple[list[Note], list[Folder], LoadStats]:
    """Load notes and folders together.

    A corrupt folder index is logged and treated as empty so that notes
    remain reachable.
    """
    notes, skipped = load_notes(storage)
    try:
        folders = load_folders(storage)
    except ValueError:
        logger.exception("Folder index is malformed, starting with no folders")
        folders = []

    stats = LoadStats(notes_loaded=len(notes), notes_skipped=skipped, folders_loaded=len(folders))
    logger.debug(
        "Load complete: {} notes, {} skipped, {} folders",
        stats.notes_loaded, stats.notes_skipped, stats.folders_loaded,
    )
    return notes, folders, stats
