#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Nested list rendering for the Markdown serializer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from chat2md.constants import LIST_INDENT_UNIT, UNORDERED_LIST_MARKER
from chat2md.context import RenderContext
from chat2md.nodes import ElementNode, TextNode, is_list

if TYPE_CHECKING:
    from chat2md.serializer import MarkdownSerializer

logger = logging.getLogger(__name__)


def list_items(list_node: ElementNode) -> list[ElementNode]:
    """Return the direct ``li`` children of a list element."""
    return [child for child in list_node.element_children if child.tag == "li"]


def render_list(
    list_node: ElementNode,
    depth: int,
    serializer: "MarkdownSerializer",
    context: Optional[RenderContext] = None,
) -> str:
    """Render a ``ul``/``ol`` element and its nested lists as Markdown.

    Each direct item becomes one line: ``depth`` indent units, the marker
    (``N. `` for ordered lists, ``- `` otherwise) and the item's inline
    content. Lists nested directly inside an item are rendered afterwards
    at ``depth + 1``, so they always land beneath their parent item no
    matter where they appear among the item's children.

    Parameters
    ----------
    list_node : ElementNode
        The list element
    depth : int
        Nesting depth; 0 for a top-level list
    serializer : MarkdownSerializer
        Serializer used for the items' inline element content
    context : RenderContext, optional
        Context of ``list_node`` within the tree; its depth is replaced by
        ``depth``, and item children are serialized at that depth

    Returns
    -------
    str
        One line per item, each ending in a newline; empty for a list with
        no items

    """
    context = (context or RenderContext()).at_depth(depth)
    ordered = list_node.tag == "ol"
    list_context = context.enter(list_node)

    output: list[str] = []
    for index, item in enumerate(list_items(list_node), start=1):
        marker = f"{index}. " if ordered else UNORDERED_LIST_MARKER
        prefix = LIST_INDENT_UNIT * context.depth + marker
        item_context = list_context.enter(item)

        inline_parts: list[str] = []
        nested_lists: list[ElementNode] = []
        for child in item.children:
            if isinstance(child, TextNode):
                inline_parts.append(child.content)
            elif is_list(child):
                nested_lists.append(child)
            else:
                inline_parts.append(serializer.serialize(child, item_context))

        output.append(f"{prefix}{''.join(inline_parts).strip()}\n")

        for nested in nested_lists:
            output.append(render_list(nested, context.depth + 1, serializer, item_context))

    logger.debug("Rendered <%s> with %d item(s) at depth %d", list_node.tag, len(list_items(list_node)), context.depth)
    return "".join(output)
