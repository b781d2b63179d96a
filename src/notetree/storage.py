"""Directory-backed storage of named text blobs."""

from pathlib import Path

from loguru import logger

from notetree.models.note import Entry


class FileStorage:
    """Store text blobs as files below a data directory.

    Every path is relative to the data directory; a path that resolves
    outside of it is rejected. Namespaces are sub-directories.
    """

    def __init__(self, datadir: str | Path) -> None:
        self.datadir = str(Path(datadir).expanduser().resolve())
        logger.debug("Storage ready, datadir {!r}", self.datadir)

    def _resolve(self, path_rel: str) -> Path:
        if Path(path_rel).is_absolute():
            msg = f"must be relative: {path_rel!r}"
            raise ValueError(msg)
        path = Path(self.datadir, path_rel).resolve()
        if not str(path).startswith(self.datadir + "/"):
            msg = f"Path escapes datadir: {path_rel!r}"
            raise ValueError(msg)
        return path

    def ensure_container(self, namespace: str) -> None:
        """Create the namespace directory if it does not exist yet."""
        path = self._resolve(namespace)
        if not path.is_dir():
            logger.debug("Creating {}", path)
        path.mkdir(parents=True, exist_ok=True)

    def list_entries(self, namespace: str) -> list[Entry]:
        """List entries of a namespace, sorted by name.

        A missing namespace has no entries.
        """
        path = self._resolve(namespace)
        if not path.is_dir():
            return []
        return [Entry(name=p.name, is_text_blob=p.is_file()) for p in sorted(path.iterdir())]

    def read_text(self, path_rel: str) -> str:
        """Read a blob. Raises FileNotFoundError when absent."""
        return self._resolve(path_rel).read_text(encoding="utf-8")

    def write_text(self, path_rel: str, contents: str) -> None:
        """Write a blob, replacing any previous contents.

        The new contents go to a temporary sibling first and are renamed over
        the target, so a failed write leaves the old blob intact. Raises
        OSError on failure.
        """
        path = self._resolve(path_rel)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        logger.debug("Writing {}", path)
        try:
            tmp.write_text(contents, encoding="utf-8")
            tmp.replace(path)
        finally:
            tmp.unlink(missing_ok=True)

    def delete_entry(self, path_rel: str) -> None:
        """Delete a blob. Raises FileNotFoundError when absent."""
        path = self._resolve(path_rel)
        logger.debug("Deleting {}", path)
        path.unlink()
