"""Tests for toolbar operations."""

from collections.abc import Callable

import pytest

from notetree.core.editor.engine import Transformer, apply_transformation
from notetree.core.editor.toolbar import (
    TOOLBAR,
    blockquote,
    bold,
    bullet_list,
    checklist,
    code_block,
    get_operation,
    heading,
    horizontal_rule,
    image,
    inline_code,
    italic,
    link,
    ordered_list,
    strikethrough,
)
from notetree.models.note import SelectionRange, TransformationResult


def run(buffer: str, start: int, end: int, transformer: Transformer) -> TransformationResult:
    return apply_transformation(buffer, SelectionRange(start, end), transformer)


def selected(result: TransformationResult) -> str:
    return result.value[result.selection_start : result.selection_end]


def test_bold_wraps_selected_word() -> None:
    """Bold around "world" keeps "world" selected inside the asterisks."""
    result = run("hello world", 6, 11, bold())
    assert result == TransformationResult("hello **world**", 8, 13)


@pytest.mark.parametrize(
    ("factory", "expected", "placeholder"),
    [
        (bold, "**Bold text**", "Bold text"),
        (italic, "*Italic text*", "Italic text"),
        (strikethrough, "~~Strikethrough~~", "Strikethrough"),
        (inline_code, "`code`", "code"),
        (code_block, "```\nCode block\n```", "Code block"),
    ],
)
def test_wrap_operations_select_placeholder_at_caret(
    factory: Callable[[], Transformer], expected: str, placeholder: str
) -> None:
    """With a caret, wrap operations insert and select their placeholder."""
    result = run("", 0, 0, factory())
    assert result.value == expected
    assert selected(result) == placeholder


def test_heading_level_is_clamped() -> None:
    """Levels below 1 and above 6 become 1 and 6."""
    low = run("", 0, 0, heading(0))
    high = run("", 0, 0, heading(9))
    assert low.value.split(" ")[0] == "#"
    assert high.value.split(" ")[0] == "######"


def test_heading_replaces_existing_marker() -> None:
    """Switching a heading level replaces the marker instead of stacking it."""
    result = run("### Title\nbody", 0, 3, heading(1))
    assert result.value == "# Title\nbody"


def test_heading_is_idempotent_on_selected_block() -> None:
    """Applying the same heading twice leaves one marker."""
    once = run("Title", 0, 5, heading(2))
    twice = run(once.value, once.selection_start, once.selection_end, heading(2))
    assert twice.value == "## Title"


def test_ordered_list_renumbers_from_one() -> None:
    """Existing or missing numbers are replaced by 1., 2., 3."""
    buffer = "7. apples\npears\n   plums"
    result = run(buffer, 0, len(buffer), ordered_list())
    assert result.value == "1. apples\n2. pears\n3. plums"
    assert result.selection_start == 0
    assert result.selection_end == len(result.value)


def test_ordered_list_numbers_each_block_independently() -> None:
    """Numbering restarts at 1 for the selected block only."""
    buffer = "1. first\n2. second\nthird\nfourth"
    start = buffer.index("third")
    result = run(buffer, start, len(buffer), ordered_list())
    assert result.value == "1. first\n2. second\n1. third\n2. fourth"


def test_ordered_list_at_caret_inserts_placeholder_item() -> None:
    """A caret gets a single numbered placeholder item."""
    result = run("", 0, 0, ordered_list())
    assert result.value == "1. List item"
    assert selected(result) == "1. List item"


def test_checklist_at_caret_selects_placeholder_only() -> None:
    """The marker is inserted but only the placeholder is selected."""
    result = run("", 0, 0, checklist())
    assert result.value == "- [ ] To-do item"
    assert selected(result) == "To-do item"


def test_checklist_converts_bullets_and_checked_items() -> None:
    """Bullets and checked boxes become unchecked items; empty lines become Task."""
    buffer = "- milk\n* [x] eggs\n\nbread"
    result = run(buffer, 0, len(buffer), checklist())
    assert result.value == "- [ ] milk\n- [ ] eggs\n- [ ] Task\n- [ ] bread"


def test_blockquote_on_partial_selection_expands_to_lines() -> None:
    """Selecting inside two lines quotes both whole lines."""
    buffer = "intro\nfirst line\nsecond line\noutro"
    start = buffer.index("line")
    end = buffer.index("second") + 3
    result = run(buffer, start, end, blockquote())
    assert result.value == "intro\n> first line\n> second line\noutro"
    assert selected(result) == "> first line\n> second line"


def test_blockquote_does_not_double_marker() -> None:
    """Lines already quoted are left alone."""
    buffer = "> quoted\nplain"
    result = run(buffer, 0, len(buffer), blockquote())
    assert result.value == "> quoted\n> plain"


def test_bullet_list_twice_at_caret_inserts_two_items() -> None:
    """Two caret applications give two placeholders, not a doubled marker."""
    first = run("", 0, 0, bullet_list())
    caret = len(first.value)
    second = run(first.value + "\n", caret + 1, caret + 1, bullet_list())
    assert second.value == "- List item\n- List item"


def test_horizontal_rule_replaces_selection() -> None:
    """The rule discards the selection and puts the caret after the block."""
    result = run("abcdef", 2, 4, horizontal_rule())
    assert result.value == "ab\n\n---\n\nef"
    assert result.selection_start == result.selection_end == 2 + len("\n\n---\n\n")


def test_link_selects_url_placeholder() -> None:
    """The selected text becomes the label and the URL is selected."""
    result = run("see docs", 4, 8, link())
    assert result.value == "see [docs](https://)"
    assert selected(result) == "https://"
    assert result.selection_start == 4 + len("docs") + 3


def test_link_at_caret_uses_label_placeholder() -> None:
    """An empty selection gets the "Link text" label."""
    result = run("", 0, 0, link())
    assert result.value == "[Link text](https://)"
    assert selected(result) == "https://"


def test_image_selects_url_placeholder() -> None:
    """Image syntax has a leading ! and the URL is selected."""
    result = run("x", 1, 1, image())
    assert result.value == "x![Alt text](https://)"
    assert result.selection_start == 1 + len("Alt text") + 4
    assert selected(result) == "https://"


def test_every_operation_handles_boundaries() -> None:
    """No operation fails on empty buffers or out-of-range selections."""
    for name, transformer in TOOLBAR.items():
        for buffer, start, end in [("", 0, 0), ("abc", 3, 3), ("abc", -5, 99), ("a\n", 2, 2)]:
            result = run(buffer, start, end, transformer)
            assert 0 <= result.selection_start <= result.selection_end <= len(result.value), name


def test_get_operation_rejects_unknown_name() -> None:
    """Unknown names raise KeyError listing the valid ones."""
    assert get_operation("bold") is TOOLBAR["bold"]
    with pytest.raises(KeyError, match="Unknown toolbar operation"):
        get_operation("underline")
