#  Copyright (c) 2025 Tom Villani, Ph.D.
"""High-level conversion functions.

These wrap the serializer with the finishing pass every caller needs:
excess blank lines are collapsed and the result is stripped.

Examples
--------
    >>> from chat2md import html_to_markdown
    >>> html_to_markdown("<h2>Notes</h2><ul><li>one</li><li>two</li></ul>")
    '## Notes\\n\\n- one\\n- two'

"""

from __future__ import annotations

import logging
from typing import Optional

from chat2md.constants import DEFAULT_HTML_PARSER
from chat2md.nodes import MarkupNode
from chat2md.normalize import finalize_markdown
from chat2md.parsing import parse_html_fragment
from chat2md.profiles import SiteProfile
from chat2md.serializer import serialize

logger = logging.getLogger(__name__)


def node_to_markdown(node: Optional[MarkupNode], profile: SiteProfile | str | None = None) -> str:
    """Serialize a markup tree and normalize the result.

    Parameters
    ----------
    node : MarkupNode or None
        Root of the subtree to convert
    profile : SiteProfile or str, optional
        Site profile or built-in profile name

    Returns
    -------
    str
        Finished Markdown

    """
    return finalize_markdown(serialize(node, profile))


def html_to_markdown(
    html: str,
    profile: SiteProfile | str | None = None,
    parser: str = DEFAULT_HTML_PARSER,
) -> str:
    """Convert an HTML fragment to finished Markdown.

    Parameters
    ----------
    html : str
        HTML fragment (or full document; only ``<body>`` is used when present)
    profile : SiteProfile or str, optional
        Site profile or built-in profile name
    parser : str, default "html.parser"
        BeautifulSoup tree builder

    Returns
    -------
    str
        Finished Markdown

    """
    markdown = node_to_markdown(parse_html_fragment(html, parser=parser), profile)
    logger.debug("Converted %d characters of HTML to %d characters of Markdown", len(html), len(markdown))
    return markdown


__all__ = ["html_to_markdown", "node_to_markdown"]
