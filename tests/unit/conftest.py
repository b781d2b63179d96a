"""Shared test fixtures."""

import json

import pytest

from notetree.core.workspace import Workspace
from tests.unit.fakes import FakeStorage

# Folder layout:
#   Projects (A)
#       Drafts (B)
#           Old (C)
#       Ideas (E)
#   Personal (D)
SAMPLE_FOLDERS = [
    {"id": "A", "name": "Projects", "parentId": None, "createdAt": 1000},
    {"id": "B", "name": "Drafts", "parentId": "A", "createdAt": 1001},
    {"id": "C", "name": "Old", "parentId": "B", "createdAt": 1002},
    {"id": "D", "name": "Personal", "parentId": None, "createdAt": 1003},
    {"id": "E", "name": "Ideas", "parentId": "A", "createdAt": 1004},
]

SAMPLE_NOTES = [
    {"id": "n-a", "title": "Roadmap", "content": "# Roadmap", "createdAt": 2000, "folderId": "A"},
    {"id": "n-b", "title": "Draft post", "content": "draft", "createdAt": 2001, "folderId": "B"},
    {"id": "n-c", "title": "Archive", "content": "old", "createdAt": 2002, "folderId": "C"},
    {"id": "n-d", "title": "Groceries", "content": "- milk", "createdAt": 2003, "folderId": "D"},
    {"id": "n-root", "title": "Inbox", "content": "", "createdAt": 2004, "folderId": None},
]


def populate(storage: FakeStorage) -> None:
    """Write the sample folders and notes into a fake storage."""
    storage.blobs["notes/_folders.json"] = json.dumps(SAMPLE_FOLDERS)
    for note in SAMPLE_NOTES:
        storage.blobs[f"notes/{note['id']}.json"] = json.dumps(note)


@pytest.fixture
def storage() -> FakeStorage:
    """Return a fake storage holding the sample tree."""
    fake = FakeStorage()
    populate(fake)
    return fake


@pytest.fixture
def workspace(storage: FakeStorage) -> Workspace:
    """Return a workspace loaded from the sample tree."""
    ws = Workspace(storage)
    ws.load()
    return ws
