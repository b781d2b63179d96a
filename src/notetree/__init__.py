"""Markdown notes in nested folders, with a selection-aware formatting toolbar."""

from notetree.core.editor.engine import apply_transformation
from notetree.core.editor.session import EditSession
from notetree.core.editor.toolbar import TOOLBAR, get_operation
from notetree.core.workspace import Workspace
from notetree.protocols import RendererProtocol, StorageProtocol
from notetree.storage import FileStorage

__all__ = [
    "TOOLBAR",
    "EditSession",
    "FileStorage",
    "RendererProtocol",
    "StorageProtocol",
    "Workspace",
    "apply_transformation",
    "get_operation",
]
