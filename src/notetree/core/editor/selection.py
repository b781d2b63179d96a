"""Selection clamping over a text buffer."""

from notetree.models.note import SelectionRange, TransformationResult


def clamp_offset(offset: int, length: int) -> int:
    """Clamp a single offset into [0, length]."""
    return max(0, min(length, offset))


def clamp_selection(selection: SelectionRange, buffer: str) -> SelectionRange:
    """Clamp a selection into the buffer, keeping start <= end.

    A reversed range (end before start) collapses to a caret at its start.
    """
    length = len(buffer)
    start = clamp_offset(selection.start, length)
    end = clamp_offset(selection.end, length)
    if end < start:
        end = start
    return SelectionRange(start, end)


def clamp_result(result: TransformationResult) -> TransformationResult:
    """Clamp a transformer's returned selection into its new value."""
    clamped = clamp_selection(result.selection, result.value)
    if clamped == result.selection:
        return result
    return TransformationResult(result.value, clamped.start, clamped.end)
