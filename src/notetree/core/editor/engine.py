"""Selection-aware markdown transformations over a plain-text buffer.

Every function here is pure: it takes the current buffer and selection and
returns a ``TransformationResult`` holding the new buffer and the selection
the host should restore. None of them can fail on any input.
"""

from collections.abc import Callable

from notetree.core.editor.selection import clamp_result, clamp_selection
from notetree.models.note import SelectionRange, TransformationResult

Transformer = Callable[[str, SelectionRange], TransformationResult]
LineTransform = Callable[[str, int], str]


def apply_transformation(
    buffer: str, selection: SelectionRange, transformer: Transformer
) -> TransformationResult:
    """Run a transformer with a clamped selection and clamp what it returns."""
    return clamp_result(transformer(buffer, clamp_selection(selection, buffer)))


def _splice(buffer: str, start: int, end: int, insertion: str) -> str:
    return buffer[:start] + insertion + buffer[end:]


def wrap_selection(
    prefix: str,
    suffix: str,
    *,
    placeholder: str = "",
    collapse_to_end: bool = False,
) -> Transformer:
    """Build a transformer that surrounds the selection with prefix/suffix.

    With an empty selection the placeholder is wrapped instead. The new
    selection covers the inner text, or collapses to a caret after the
    insertion when collapse_to_end is set.
    """

    def transform(buffer: str, selection: SelectionRange) -> TransformationResult:
        start, end = selection.start, selection.end
        selected = placeholder if selection.is_caret else buffer[start:end]
        insertion = f"{prefix}{selected}{suffix}"
        value = _splice(buffer, start, end, insertion)

        if collapse_to_end:
            caret = start + len(insertion)
            return TransformationResult(value, caret, caret)

        inner_start = start + len(prefix)
        return TransformationResult(value, inner_start, inner_start + len(selected))

    return transform


def line_bounds(buffer: str, start: int, end: int) -> tuple[int, int]:
    """Expand [start, end) to whole lines.

    Returns (line_start, line_end) where line_start follows the nearest
    newline before start (or is 0) and line_end is the nearest newline at or
    after end (or the buffer length).
    """
    line_start = buffer.rfind("\n", 0, start) + 1
    line_end = buffer.find("\n", end)
    if line_end == -1:
        line_end = len(buffer)
    return line_start, line_end


def prefix_lines(
    prefix: str,
    *,
    placeholder: str = "",
    transform_line: LineTransform | None = None,
) -> Transformer:
    """Build a transformer that puts prefix in front of every selected line.

    A caret inserts prefix + placeholder and selects the placeholder. A
    span is widened to whole lines; each line is passed through
    transform_line (given the line and its index within the block) and is
    prefixed unless it already starts with prefix.
    """

    def transform(buffer: str, selection: SelectionRange) -> TransformationResult:
        start, end = selection.start, selection.end
        if selection.is_caret:
            value = _splice(buffer, start, end, f"{prefix}{placeholder}")
            cursor = start + len(prefix)
            return TransformationResult(value, cursor, cursor + len(placeholder))

        line_start, line_end = line_bounds(buffer, start, end)
        formatted_lines = []
        for index, line in enumerate(buffer[line_start:line_end].split("\n")):
            if transform_line is not None:
                line = transform_line(line, index)
            formatted_lines.append(line if line.startswith(prefix) else f"{prefix}{line}")
        formatted = "\n".join(formatted_lines)

        value = _splice(buffer, line_start, line_end, formatted)
        return TransformationResult(value, line_start, line_start + len(formatted))

    return transform


def insert_block(block: str) -> Transformer:
    """Build a transformer that replaces the selection with a literal block.

    The caret lands right after the inserted block.
    """

    def transform(buffer: str, selection: SelectionRange) -> TransformationResult:
        value = _splice(buffer, selection.start, selection.end, block)
        caret = selection.start + len(block)
        return TransformationResult(value, caret, caret)

    return transform


def insert_reference(
    *, opener: str, placeholder: str, url_placeholder: str = "https://"
) -> Transformer:
    """Build a transformer for ``[label](url)`` style references.

    The label is the selection (or placeholder); the new selection covers
    the URL placeholder so it can be typed over right away.
    """

    def transform(buffer: str, selection: SelectionRange) -> TransformationResult:
        label = placeholder if selection.is_caret else buffer[selection.start : selection.end]
        syntax = f"{opener}{label}]({url_placeholder})"
        value = _splice(buffer, selection.start, selection.end, syntax)
        url_start = selection.start + len(opener) + len(label) + 2
        return TransformationResult(value, url_start, url_start + len(url_placeholder))

    return transform
