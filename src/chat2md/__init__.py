"""chat2md - convert conversation markup to portable Markdown.

chat2md turns HTML fragments cut from chat web pages into clean Markdown,
keeping the semantic structure (headings, paragraphs, emphasis, links,
fenced code with language tags, block quotes, nested lists, tables and
horizontal rules) and dropping the page's decorative chrome.

The core is a recursive serializer over a small immutable markup tree.
Site-specific rules (chrome detection, citation stub filtering, artifact
cards) are injected through site profiles, so one serializer handles every
supported front-end.

Examples
--------
Convert an HTML fragment:

    >>> from chat2md import html_to_markdown
    >>> html_to_markdown('<p>See <a href="http://x">docs</a></p>')
    'See [docs](http://x)'

Assemble a transcript from already-located turns:

    >>> from chat2md import Turn, parse_html_fragment, render_transcript
    >>> turns = [
    ...     Turn("user", parse_html_fragment("<p>Hi</p>")),
    ...     Turn("assistant", parse_html_fragment("<p>Hello!</p>")),
    ... ]
    >>> render_transcript(turns, title="Greeting", profile="claude")
    '# Greeting\\n\\n---\\n\\n## You\\n\\nHi\\n\\n---\\n\\n## Claude\\n\\nHello!'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from chat2md.api import html_to_markdown, node_to_markdown
from chat2md.context import RenderContext
from chat2md.exceptions import Chat2MdError, ConfigError, FileError, UnknownProfileError, ValidationError
from chat2md.lists import render_list
from chat2md.nodes import ElementNode, MarkupNode, NodeKind, TextNode, classify, element, text_content
from chat2md.normalize import collapse_blank_lines, finalize_markdown
from chat2md.parsing import from_soup, parse_html_fragment
from chat2md.profiles import CHATGPT_PROFILE, CLAUDE_PROFILE, GENERIC_PROFILE, SiteProfile, get_profile
from chat2md.serializer import MarkdownSerializer, serialize
from chat2md.tables import render_table
from chat2md.transcript import Turn, join_sections, render_transcript, render_turn

__all__ = [
    "CHATGPT_PROFILE",
    "CLAUDE_PROFILE",
    "Chat2MdError",
    "ConfigError",
    "ElementNode",
    "FileError",
    "GENERIC_PROFILE",
    "MarkdownSerializer",
    "MarkupNode",
    "NodeKind",
    "RenderContext",
    "SiteProfile",
    "TextNode",
    "Turn",
    "UnknownProfileError",
    "ValidationError",
    "__version__",
    "classify",
    "collapse_blank_lines",
    "element",
    "finalize_markdown",
    "from_soup",
    "get_profile",
    "html_to_markdown",
    "join_sections",
    "node_to_markdown",
    "parse_html_fragment",
    "render_list",
    "render_table",
    "render_transcript",
    "render_turn",
    "serialize",
]
