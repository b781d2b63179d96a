"""Configuration constants for notetree."""

import os
from pathlib import Path

# Directory with data. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/notetree").expanduser(),
    Path("~/.notetree").expanduser(),
    Path("~/.config/notetree").expanduser(),
]

# Environment variable that overrides DATA_DIRECTORIES.
DATA_DIR_ENV: str = "NOTETREE_DATA_DIR"

# Namespace (sub-directory) holding one JSON file per note plus the folder index.
NOTES_NAMESPACE: str = "notes"

# Folder index blob. Note ids never start with "_", so this cannot clash with a note.
FOLDER_INDEX_NAME: str = "_folders.json"

NOTE_SUFFIX: str = ".json"

UNTITLED_NOTE: str = "Untitled Note"
DEFAULT_FOLDER_NAME: str = "New Folder"


def resolve_data_directory() -> Path:
    """Return the data directory.

    The environment override wins, then the first existing candidate. If
    none exists, the first candidate is returned so it can be created.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]


def note_path(note_id: str) -> str:
    """Storage path of a note blob, relative to the data directory."""
    return f"{NOTES_NAMESPACE}/{note_id}{NOTE_SUFFIX}"


def folder_index_path() -> str:
    """Storage path of the folder index blob."""
    return f"{NOTES_NAMESPACE}/{FOLDER_INDEX_NAME}"
