"""Toolbar operations: named markdown transformers for the editor."""

import re

from notetree.core.editor.engine import (
    Transformer,
    insert_block,
    insert_reference,
    prefix_lines,
    wrap_selection,
)

_HEADING_MARKER = re.compile(r"^#{1,6}\s*")
_QUOTE_MARKER = re.compile(r"^>\s?")
_BULLET_MARKER = re.compile(r"^(-|\*)\s*")
_CHECKLIST_MARKER = re.compile(r"^(-|\*)\s*\[( |x|X)\]\s*")
_ORDERED_MARKER = re.compile(r"^\d+\.\s*")

HORIZONTAL_RULE = "\n\n---\n\n"
CHECKLIST_PLACEHOLDER = "To-do item"
CHECKLIST_EMPTY_LINE = "Task"


def heading(level: int) -> Transformer:
    """Heading marker of 1-6 ``#``; out-of-range levels are clamped."""
    level = min(max(level, 1), 6)
    return prefix_lines(
        "#" * level + " ",
        placeholder=f"Heading {level}",
        transform_line=lambda line, _index: _HEADING_MARKER.sub("", line, count=1),
    )


def bold() -> Transformer:
    return wrap_selection("**", "**", placeholder="Bold text")


def italic() -> Transformer:
    return wrap_selection("*", "*", placeholder="Italic text")


def strikethrough() -> Transformer:
    return wrap_selection("~~", "~~", placeholder="Strikethrough")


def inline_code() -> Transformer:
    return wrap_selection("`", "`", placeholder="code")


def code_block() -> Transformer:
    return wrap_selection("```\n", "\n```", placeholder="Code block")


def blockquote() -> Transformer:
    return prefix_lines(
        "> ",
        placeholder="Quote",
        transform_line=lambda line, _index: _QUOTE_MARKER.sub("", line, count=1),
    )


def bullet_list() -> Transformer:
    return prefix_lines(
        "- ",
        placeholder="List item",
        transform_line=lambda line, _index: _BULLET_MARKER.sub("", line, count=1),
    )


def _renumber(line: str, index: int) -> str:
    cleaned = _ORDERED_MARKER.sub("", line, count=1).lstrip()
    return f"{index + 1}. {cleaned}"


def ordered_list() -> Transformer:
    """Number each selected line from 1, replacing any existing numbers."""
    return prefix_lines("", placeholder="1. List item", transform_line=_renumber)


def _checklist_item(line: str, _index: int) -> str:
    cleaned = _CHECKLIST_MARKER.sub("", line, count=1)
    cleaned = _BULLET_MARKER.sub("", cleaned, count=1)
    return cleaned or CHECKLIST_EMPTY_LINE


def checklist() -> Transformer:
    """Unchecked task items; bullets and existing checkboxes are replaced."""
    return prefix_lines("- [ ] ", placeholder=CHECKLIST_PLACEHOLDER, transform_line=_checklist_item)


def horizontal_rule() -> Transformer:
    return insert_block(HORIZONTAL_RULE)


def link() -> Transformer:
    return insert_reference(opener="[", placeholder="Link text")


def image() -> Transformer:
    return insert_reference(opener="![", placeholder="Alt text")


TOOLBAR: dict[str, Transformer] = {
    **{f"heading{level}": heading(level) for level in range(1, 7)},
    "bold": bold(),
    "italic": italic(),
    "strikethrough": strikethrough(),
    "inline-code": inline_code(),
    "code-block": code_block(),
    "blockquote": blockquote(),
    "bullet-list": bullet_list(),
    "ordered-list": ordered_list(),
    "checklist": checklist(),
    "horizontal-rule": horizontal_rule(),
    "link": link(),
    "image": image(),
}


def get_operation(name: str) -> Transformer:
    """Look up a toolbar operation by name.

    Raises:
        KeyError: If no operation has that name.
    """
    try:
        return TOOLBAR[name]
    except KeyError:
        msg = f"Unknown toolbar operation {name!r}, expected one of {sorted(TOOLBAR)!r}"
        raise KeyError(msg) from None
