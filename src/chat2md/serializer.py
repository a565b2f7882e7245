#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Recursive markup-to-Markdown serializer.

This module walks a markup tree (see :mod:`chat2md.nodes`) depth-first and
emits Markdown for each element kind: headings, paragraphs, emphasis,
links, fenced and inline code, block quotes, nested lists, tables, line
breaks and horizontal rules. Elements without a rule of their own are a
structural pass-through: their children are rendered with no markup added.

Serialization is total. Missing attributes fall back to empty values,
empty lists and tables render as empty text, and unknown elements pass
through, so an unusual fragment degrades to plain text instead of aborting
a whole conversation.

Block elements are surrounded by literal blank lines and nothing is
deduplicated during the walk; callers run
:func:`chat2md.normalize.finalize_markdown` on the finished string.

Site-specific behaviour (which elements are chrome, citation stub
filtering, artifact cards, span-wrapped links) comes from the injected
:class:`chat2md.profiles.SiteProfile`.

Examples
--------
    >>> from chat2md.nodes import element
    >>> serialize(element("p", "hello"))
    '\\n\\nhello\\n\\n'

"""

from __future__ import annotations

import logging
from typing import Optional

from chat2md.constants import (
    BLANK_LINE,
    BLOCKQUOTE_PREFIX,
    CODE_FENCE,
    CODE_LANGUAGE_PATTERN,
    DEFAULT_ARTIFACT_TITLE,
    HORIZONTAL_RULE,
)
from chat2md.context import RenderContext
from chat2md.lists import render_list
from chat2md.nodes import (
    ElementNode,
    MarkupNode,
    NodeKind,
    TextNode,
    classify,
    find_first,
    find_first_tag,
    heading_level,
    text_content,
)
from chat2md.profiles import SiteProfile, get_profile
from chat2md.tables import render_table

logger = logging.getLogger(__name__)


def _find_by_class_fragment(node: ElementNode, fragment: str) -> Optional[ElementNode]:
    if not fragment:
        return None
    return find_first(node, lambda candidate: candidate.class_contains(fragment))


class MarkdownSerializer:
    """Markup tree to Markdown converter.

    Parameters
    ----------
    profile : SiteProfile or str, optional
        Site profile (or built-in profile name) supplying the chrome,
        citation and artifact rules. Defaults to the generic profile.

    """

    _KIND_HANDLERS: dict[NodeKind, str] = {
        NodeKind.PREFORMATTED: "_serialize_code_block",
        NodeKind.CODE: "_serialize_inline_code",
        NodeKind.HEADING: "_serialize_heading",
        NodeKind.PARAGRAPH: "_serialize_paragraph",
        NodeKind.BLOCKQUOTE: "_serialize_blockquote",
        NodeKind.LIST: "_serialize_list",
        NodeKind.TABLE: "_serialize_table",
        NodeKind.RULE: "_serialize_rule",
        NodeKind.LINE_BREAK: "_serialize_line_break",
        NodeKind.STRONG: "_serialize_strong",
        NodeKind.EMPHASIS: "_serialize_emphasis",
        NodeKind.STRIKETHROUGH: "_serialize_strikethrough",
        NodeKind.LINK: "_serialize_link",
        NodeKind.SPAN: "_serialize_span",
        NodeKind.CONTAINER: "serialize_children",
    }

    def __init__(self, profile: SiteProfile | str | None = None):
        self.profile = get_profile(profile)

    def serialize(self, node: Optional[MarkupNode], context: Optional[RenderContext] = None) -> str:
        """Convert a node and its subtree to Markdown.

        Parameters
        ----------
        node : MarkupNode or None
            Node to convert; None yields an empty string
        context : RenderContext, optional
            Position of ``node`` in the enclosing tree

        Returns
        -------
        str
            Markdown text, before blank-line normalization

        """
        if node is None:
            return ""
        if isinstance(node, TextNode):
            return node.content

        context = context or RenderContext()

        if self.profile.is_chrome(node, context.ancestors):
            return ""
        if self.profile.is_artifact(node):
            return self._serialize_artifact(node, context)

        handler = getattr(self, self._KIND_HANDLERS[classify(node)])
        return handler(node, context)

    def serialize_children(self, node: ElementNode, context: Optional[RenderContext] = None) -> str:
        """Concatenate the Markdown of ``node``'s children, adding nothing of its own."""
        child_context = (context or RenderContext()).enter(node)
        return "".join(self.serialize(child, child_context) for child in node.children)

    def _serialize_artifact(self, node: ElementNode, context: RenderContext) -> str:
        title_node = _find_by_class_fragment(node, self.profile.artifact_title_fragment)
        type_node = _find_by_class_fragment(node, self.profile.artifact_type_fragment)
        title = text_content(title_node).strip() if title_node else DEFAULT_ARTIFACT_TITLE
        artifact_type = text_content(type_node).strip() if type_node else ""
        suffix = f" ({artifact_type})" if artifact_type else ""
        return f"{BLANK_LINE}> **📎 {title}**{suffix}{BLANK_LINE}"

    def _serialize_code_block(self, node: ElementNode, context: RenderContext) -> str:
        code_node = find_first_tag(node, "code")
        match = CODE_LANGUAGE_PATTERN.search(code_node.class_attr) if code_node else None
        language = match.group(1) if match else ""
        code = text_content(code_node or node)
        return f"{BLANK_LINE}{CODE_FENCE}{language}\n{code}\n{CODE_FENCE}{BLANK_LINE}"

    def _serialize_inline_code(self, node: ElementNode, context: RenderContext) -> str:
        # code reached from inside a fenced block belongs to that block's text
        if context.inside("pre"):
            return ""
        return f"`{text_content(node)}`"

    def _serialize_heading(self, node: ElementNode, context: RenderContext) -> str:
        hashes = "#" * heading_level(node)
        return f"{BLANK_LINE}{hashes} {text_content(node).strip()}{BLANK_LINE}"

    def _serialize_paragraph(self, node: ElementNode, context: RenderContext) -> str:
        return f"{BLANK_LINE}{self.serialize_children(node, context).strip()}{BLANK_LINE}"

    def _serialize_blockquote(self, node: ElementNode, context: RenderContext) -> str:
        content = self.serialize_children(node, context).strip()
        quoted = "\n".join(BLOCKQUOTE_PREFIX + line for line in content.split("\n"))
        return f"{BLANK_LINE}{quoted}{BLANK_LINE}"

    def _serialize_list(self, node: ElementNode, context: RenderContext) -> str:
        return "\n" + render_list(node, 0, self, context) + "\n"

    def _serialize_table(self, node: ElementNode, context: RenderContext) -> str:
        return f"{BLANK_LINE}{render_table(node, self, context)}{BLANK_LINE}"

    def _serialize_rule(self, node: ElementNode, context: RenderContext) -> str:
        return f"{BLANK_LINE}{HORIZONTAL_RULE}{BLANK_LINE}"

    def _serialize_line_break(self, node: ElementNode, context: RenderContext) -> str:
        return "\n"

    def _serialize_strong(self, node: ElementNode, context: RenderContext) -> str:
        return f"**{self.serialize_children(node, context)}**"

    def _serialize_emphasis(self, node: ElementNode, context: RenderContext) -> str:
        return f"*{self.serialize_children(node, context)}*"

    def _serialize_strikethrough(self, node: ElementNode, context: RenderContext) -> str:
        return f"~~{self.serialize_children(node, context)}~~"

    def _serialize_link(self, node: ElementNode, context: RenderContext) -> str:
        link_text = self.serialize_children(node, context)
        if self.profile.is_citation_stub(link_text):
            logger.debug("Dropping citation stub link: %.60r", link_text)
            return ""
        href = node.get("href")
        if href:
            return f"[{link_text.strip()}]({href})"
        return link_text

    def _serialize_span(self, node: ElementNode, context: RenderContext) -> str:
        if self.profile.unwrap_span_links:
            link = find_first_tag(node, "a")
            if link is not None:
                raw_text = text_content(link)
                if self.profile.is_citation_stub(raw_text):
                    logger.debug("Dropping citation stub link in span: %.60r", raw_text)
                    return ""
                href = link.get("href")
                return f"[{raw_text.strip()}]({href})" if href else raw_text.strip()
        return self.serialize_children(node, context)


def serialize(
    node: Optional[MarkupNode],
    profile: SiteProfile | str | None = None,
    context: Optional[RenderContext] = None,
) -> str:
    """Convert a markup node to Markdown with a one-off serializer.

    Parameters
    ----------
    node : MarkupNode or None
        Node to convert; None yields an empty string
    profile : SiteProfile or str, optional
        Site profile or built-in profile name
    context : RenderContext, optional
        Position of ``node`` in an enclosing tree

    Returns
    -------
    str
        Markdown text, before blank-line normalization

    """
    return MarkdownSerializer(profile).serialize(node, context)


__all__ = ["MarkdownSerializer", "RenderContext", "serialize"]
