#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Whitespace normalization applied to fully serialized Markdown.

The serializer emits a literal blank line around every block and never
deduplicates them while walking the tree. Collapsing happens once, here,
so nested blocks cannot compound their spacing.
"""

from __future__ import annotations

from chat2md.constants import BLANK_LINE, EXCESS_NEWLINES_PATTERN


def collapse_blank_lines(text: str) -> str:
    """Collapse every run of three or more newlines to exactly two."""
    return EXCESS_NEWLINES_PATTERN.sub(BLANK_LINE, text)


def finalize_markdown(text: str) -> str:
    """Collapse excess blank lines and strip leading/trailing whitespace."""
    return collapse_blank_lines(text).strip()
