#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chat2md/nodes.py
"""Markup tree node classes consumed by the Markdown serializer.

The serializer reads a small, closed set of node types rather than a live
DOM: a markup tree is made of :class:`TextNode` leaves and
:class:`ElementNode` branches. Trees are immutable; the serializer never
changes a node and never keeps a reference to one after it returns.

Element dispatch goes through :func:`classify`, which maps every tag name to
a :class:`NodeKind`. Tags without a dedicated rendering rule map to
``NodeKind.CONTAINER``, the structural pass-through kind, so the dispatch
table stays exhaustive for any input.

Examples
--------
Build a tree by hand with the :func:`element` factory:

    >>> from chat2md.nodes import element
    >>> tree = element("p", "Hello ", element("strong", "world"))
    >>> text_content(tree)
    'Hello world'

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional, Union

from chat2md.constants import (
    EMPHASIS_TAGS,
    HEADING_TAGS,
    LIST_TAGS,
    STRIKETHROUGH_TAGS,
    STRONG_TAGS,
)


class NodeKind(Enum):
    """Element kinds the serializer has a rendering rule for."""

    PREFORMATTED = "preformatted"
    CODE = "code"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCKQUOTE = "blockquote"
    LIST = "list"
    TABLE = "table"
    RULE = "rule"
    LINE_BREAK = "line_break"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    SPAN = "span"
    CONTAINER = "container"


@dataclass(frozen=True)
class TextNode:
    """Leaf node holding literal text.

    Parameters
    ----------
    content : str
        Text copied verbatim into the output

    """

    content: str


@dataclass(frozen=True)
class ElementNode:
    """Element node with a tag, class list, attributes and ordered children.

    Parameters
    ----------
    tag : str
        Lower-case tag name (e.g. ``"p"``, ``"ul"``)
    classes : tuple of str, default = ()
        Class names in source order
    attributes : mapping of str to str, default = empty dict
        Remaining attributes; multi-valued attributes are space-joined.
        Stored as a read-only view and left out of the hash
    children : tuple of MarkupNode, default = ()
        Child nodes in document order

    """

    tag: str
    classes: tuple[str, ...] = ()
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: tuple["MarkupNode", ...] = ()

    def __post_init__(self) -> None:
        """Freeze the attribute mapping and coerce sequences to tuples."""
        object.__setattr__(self, "classes", tuple(self.classes))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def class_attr(self) -> str:
        """Return the class list as it would appear in a ``class`` attribute."""
        return " ".join(self.classes)

    def has_class(self, name: str) -> bool:
        """Return True if ``name`` is one of this element's classes."""
        return name in self.classes

    def class_contains(self, fragment: str) -> bool:
        """Return True if the class attribute contains ``fragment`` as a substring."""
        return fragment in self.class_attr

    def get(self, name: str, default: str = "") -> str:
        """Return an attribute value, or ``default`` when it is missing."""
        return self.attributes.get(name, default)

    @property
    def element_children(self) -> tuple["ElementNode", ...]:
        """Return only the element children, in document order."""
        return tuple(child for child in self.children if isinstance(child, ElementNode))


MarkupNode = Union[TextNode, ElementNode]


_SIMPLE_KINDS: dict[str, NodeKind] = {
    "pre": NodeKind.PREFORMATTED,
    "code": NodeKind.CODE,
    "p": NodeKind.PARAGRAPH,
    "blockquote": NodeKind.BLOCKQUOTE,
    "table": NodeKind.TABLE,
    "hr": NodeKind.RULE,
    "br": NodeKind.LINE_BREAK,
    "a": NodeKind.LINK,
    "span": NodeKind.SPAN,
}
for _tag in HEADING_TAGS:
    _SIMPLE_KINDS[_tag] = NodeKind.HEADING
for _tag in LIST_TAGS:
    _SIMPLE_KINDS[_tag] = NodeKind.LIST
for _tag in STRONG_TAGS:
    _SIMPLE_KINDS[_tag] = NodeKind.STRONG
for _tag in EMPHASIS_TAGS:
    _SIMPLE_KINDS[_tag] = NodeKind.EMPHASIS
for _tag in STRIKETHROUGH_TAGS:
    _SIMPLE_KINDS[_tag] = NodeKind.STRIKETHROUGH


def classify(node: ElementNode) -> NodeKind:
    """Return the rendering kind for an element; unknown tags are containers."""
    return _SIMPLE_KINDS.get(node.tag, NodeKind.CONTAINER)


def heading_level(node: ElementNode) -> int:
    """Return the level (1-6) of a heading element."""
    return int(node.tag[1])


def is_list(node: MarkupNode) -> bool:
    """Return True for ``ul`` and ``ol`` elements."""
    return isinstance(node, ElementNode) and node.tag in LIST_TAGS


def text_content(node: Optional[MarkupNode]) -> str:
    """Return the concatenated text of a node and all of its descendants.

    Mirrors the DOM ``textContent`` property: every text leaf is included,
    whatever element it sits in.
    """
    if node is None:
        return ""
    if isinstance(node, TextNode):
        return node.content
    return "".join(text_content(child) for child in node.children)


def iter_descendants(node: ElementNode) -> Iterator[ElementNode]:
    """Yield every descendant element of ``node`` in document order."""
    for child in node.element_children:
        yield child
        yield from iter_descendants(child)


def find_first(node: ElementNode, predicate: Callable[[ElementNode], bool]) -> Optional[ElementNode]:
    """Return the first descendant element matching ``predicate``, or None."""
    for descendant in iter_descendants(node):
        if predicate(descendant):
            return descendant
    return None


def find_first_tag(node: ElementNode, tag: str) -> Optional[ElementNode]:
    """Return the first descendant element with the given tag name, or None."""
    return find_first(node, lambda candidate: candidate.tag == tag)


def element(
    tag: str,
    *children: Union[MarkupNode, str],
    classes: tuple[str, ...] | list[str] | str = (),
    **attributes: str,
) -> ElementNode:
    """Build an :class:`ElementNode`, wrapping plain strings in :class:`TextNode`.

    Parameters
    ----------
    tag : str
        Tag name; lower-cased
    *children : MarkupNode or str
        Child nodes in document order
    classes : tuple, list or str, default = ()
        Class names, or a whitespace-separated class string
    **attributes : str
        Element attributes; a trailing underscore is dropped so reserved words
        such as ``for_`` can be passed

    Returns
    -------
    ElementNode
        The new element

    """
    if isinstance(classes, str):
        classes = tuple(classes.split())
    return ElementNode(
        tag=tag.lower(),
        classes=tuple(classes),
        attributes={name.rstrip("_"): value for name, value in attributes.items()},
        children=tuple(TextNode(child) if isinstance(child, str) else child for child in children),
    )


__all__ = [
    "ElementNode",
    "MarkupNode",
    "NodeKind",
    "TextNode",
    "classify",
    "element",
    "find_first",
    "find_first_tag",
    "heading_level",
    "is_list",
    "iter_descendants",
    "text_content",
]
