#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Pipe table rendering for the Markdown serializer.

The first row is always treated as the header: a ``---`` separator row
follows it with one cell per column of that row, whether or not its cells
are ``th`` elements. Later rows are emitted as-is, without padding, in
source order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Optional

from chat2md.constants import TABLE_CELL_TAGS, TABLE_SEPARATOR_CELL
from chat2md.context import RenderContext
from chat2md.nodes import ElementNode

if TYPE_CHECKING:
    from chat2md.serializer import MarkdownSerializer

logger = logging.getLogger(__name__)


def iter_rows(node: ElementNode) -> Iterator[ElementNode]:
    """Yield the ``tr`` elements of a table in document order.

    Rows inside ``thead``/``tbody``/``tfoot`` (or any other wrapper) are
    included; rows of nested tables are not.
    """
    for child in node.element_children:
        if child.tag == "tr":
            yield child
        elif child.tag != "table":
            yield from iter_rows(child)


def row_cells(row: ElementNode) -> list[ElementNode]:
    """Return the direct ``th``/``td`` children of a row."""
    return [child for child in row.element_children if child.tag in TABLE_CELL_TAGS]


def _format_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |\n"


def render_table(
    table_node: ElementNode,
    serializer: "MarkdownSerializer",
    context: Optional[RenderContext] = None,
) -> str:
    """Render a ``table`` element as a Markdown pipe table.

    Parameters
    ----------
    table_node : ElementNode
        The table element
    serializer : MarkdownSerializer
        Serializer used for cell content
    context : RenderContext, optional
        Context of ``table_node`` within the tree

    Returns
    -------
    str
        The table, one line per row plus the separator; empty when the table
        has no rows

    """
    table_context = (context or RenderContext()).enter(table_node)
    rows = list(iter_rows(table_node))
    if not rows:
        return ""

    output: list[str] = []
    for index, row in enumerate(rows):
        row_context = table_context.enter(row)
        cells = [serializer.serialize_children(cell, row_context).strip() for cell in row_cells(row)]
        output.append(_format_row(cells))
        if index == 0:
            output.append(_format_row([TABLE_SEPARATOR_CELL] * len(cells)))

    logger.debug("Rendered table with %d row(s)", len(rows))
    return "".join(output)
