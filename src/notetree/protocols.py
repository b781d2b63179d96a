"""Protocols for dependency injection in the note workspace."""

from typing import Protocol, runtime_checkable

from notetree.models.note import Entry


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for durable storage of named text blobs."""

    def ensure_container(self, namespace: str) -> None:
        """Create the namespace if needed. Idempotent."""
        ...

    def list_entries(self, namespace: str) -> list[Entry]:
        """List the entries of a namespace."""
        ...

    def read_text(self, path_rel: str) -> str:
        """Read a blob. Raises FileNotFoundError when absent."""
        ...

    def write_text(self, path_rel: str, contents: str) -> None:
        """Write a blob. Raises OSError on failure."""
        ...

    def delete_entry(self, path_rel: str) -> None:
        """Delete a blob. Raises FileNotFoundError when absent."""
        ...


@runtime_checkable
class RendererProtocol(Protocol):
    """Protocol for markdown renderers used by the preview."""

    def render(self, markdown_text: str) -> str:
        """Return sanitized HTML for the given markdown."""
        ...
