#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Build markup trees from HTML using BeautifulSoup.

The serializer works on the immutable node classes in
:mod:`chat2md.nodes`. This module adapts a parsed BeautifulSoup document
(or any element inside one) into that form:

- element tag names are lower-cased
- the ``class`` attribute becomes the element's class tuple; other
  multi-valued attributes are space-joined
- comments, doctypes, CDATA sections and processing instructions are dropped
- ``script`` and ``style`` elements are dropped with their content

Text is taken as BeautifulSoup decodes it, so entities such as ``&amp;``
are already resolved.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, Tag
from bs4.element import PreformattedString

from chat2md.constants import DEFAULT_HTML_PARSER, FRAGMENT_ROOT_TAG, STRIPPED_HTML_ELEMENTS
from chat2md.exceptions import ValidationError
from chat2md.nodes import ElementNode, MarkupNode, TextNode

logger = logging.getLogger(__name__)


def _convert_attributes(tag: Tag) -> tuple[tuple[str, ...], dict[str, str]]:
    classes: tuple[str, ...] = ()
    attributes: dict[str, str] = {}
    for name, value in tag.attrs.items():
        if name == "class":
            classes = tuple(value) if isinstance(value, (list, tuple)) else tuple(str(value).split())
        elif isinstance(value, (list, tuple)):
            attributes[name] = " ".join(value)
        else:
            attributes[name] = str(value)
    return classes, attributes


def from_soup(node: Any) -> Optional[MarkupNode]:
    """Convert a BeautifulSoup node into a markup node.

    Parameters
    ----------
    node : Any
        A ``Tag``, ``NavigableString`` or ``BeautifulSoup`` object

    Returns
    -------
    MarkupNode or None
        The converted node, or None for nodes that carry no content
        (comments, doctypes, ``script``/``style`` elements, ...)

    """
    if isinstance(node, PreformattedString):
        return None
    if isinstance(node, NavigableString):
        return TextNode(str(node))
    if not isinstance(node, Tag):
        return None

    name = (node.name or "").lower()
    if name in STRIPPED_HTML_ELEMENTS:
        return None
    if isinstance(node, BeautifulSoup):
        name = FRAGMENT_ROOT_TAG

    classes, attributes = _convert_attributes(node)
    children = tuple(child for child in (from_soup(child) for child in node.children) if child is not None)
    return ElementNode(tag=name, classes=classes, attributes=attributes, children=children)


def parse_html_fragment(html: str, parser: str = DEFAULT_HTML_PARSER) -> ElementNode:
    """Parse an HTML string into a markup tree.

    Parameters
    ----------
    html : str
        HTML document or fragment
    parser : str, default "html.parser"
        BeautifulSoup tree builder name (``"lxml"`` and ``"html5lib"`` work
        when those packages are installed)

    Returns
    -------
    ElementNode
        The ``body`` element when the document has one, otherwise a
        synthetic fragment root holding the parsed top-level nodes

    Raises
    ------
    ValidationError
        If the requested tree builder is not installed

    """
    try:
        soup = BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise ValidationError(
            f"HTML parser '{parser}' is not available", parameter_name="parser", parameter_value=parser, original_error=e
        ) from e
    root = soup.body if soup.body is not None else soup
    converted = from_soup(root)
    if not isinstance(converted, ElementNode):
        return ElementNode(tag=FRAGMENT_ROOT_TAG)
    logger.debug("Parsed HTML fragment (%d characters) with %s", len(html), parser)
    return converted


__all__ = ["from_soup", "parse_html_fragment"]
