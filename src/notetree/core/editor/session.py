"""Editing session: applies toolbar transformations to a live buffer."""

from collections.abc import Callable

from loguru import logger

from notetree.core.editor.engine import Transformer, apply_transformation
from notetree.core.editor.selection import clamp_selection
from notetree.models.note import SelectionRange, TransformationResult

Continuation = Callable[[], None]
Scheduler = Callable[[Continuation], None]


def _run_now(continuation: Continuation) -> None:
    continuation()


class EditSession:
    """Owns the buffer and selection of the note being edited.

    A toolbar action happens in two ordered steps: the new content is
    committed, then the selection computed against that content is
    restored. The restore step is handed to ``scheduler`` as a one-shot
    continuation, so a host with its own event loop can run it after the
    content update has been drawn. The default runs it immediately.
    """

    def __init__(
        self,
        content: str = "",
        selection: SelectionRange | None = None,
        *,
        scheduler: Scheduler = _run_now,
        on_content: Callable[[str], None] | None = None,
        on_selection: Callable[[SelectionRange], None] | None = None,
    ) -> None:
        self._content = content
        self._selection = clamp_selection(selection or SelectionRange(0, 0), content)
        self._scheduler = scheduler
        self._on_content = on_content
        self._on_selection = on_selection
        self._pending: SelectionRange | None = None

    @property
    def content(self) -> str:
        return self._content

    @property
    def selection(self) -> SelectionRange:
        return self._selection

    @property
    def restore_pending(self) -> bool:
        """True between a content commit and its selection restore."""
        return self._pending is not None

    def set_content(self, content: str) -> None:
        """Replace the buffer wholesale, e.g. from typing in the host widget."""
        self._content = content
        self._selection = clamp_selection(self._selection, content)

    def select(self, start: int, end: int | None = None) -> SelectionRange:
        """Set the selection from the host widget; end defaults to start."""
        self._selection = clamp_selection(
            SelectionRange(start, start if end is None else end), self._content
        )
        return self._selection

    def apply(self, transformer: Transformer) -> TransformationResult:
        """Run a transformer over the current buffer and selection."""
        result = apply_transformation(self._content, self._selection, transformer)
        self._commit(result.value)
        self._pending = result.selection
        self._scheduler(self._restore)
        return result

    def _commit(self, content: str) -> None:
        self._content = content
        if self._on_content is not None:
            self._on_content(content)

    def _restore(self) -> None:
        if self._pending is None:
            return
        # The buffer may have been replaced again before the restore ran.
        self._selection = clamp_selection(self._pending, self._content)
        self._pending = None
        logger.debug("Selection restored to {}-{}", self._selection.start, self._selection.end)
        if self._on_selection is not None:
            self._on_selection(self._selection)
