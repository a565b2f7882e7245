#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and defaults shared across the chat2md package.

Tag tables drive element classification in :mod:`chat2md.nodes`; the
remaining values are the literal Markdown fragments emitted by the
serializer and the defaults used by the site profiles.
"""

from __future__ import annotations

import re

# Markdown literals
BLANK_LINE = "\n\n"
CODE_FENCE = "```"
HORIZONTAL_RULE = "---"
LIST_INDENT_UNIT = "  "
UNORDERED_LIST_MARKER = "- "
BLOCKQUOTE_PREFIX = "> "
TABLE_SEPARATOR_CELL = "---"
TRANSCRIPT_SEPARATOR = "\n\n---\n\n"

# Element classification
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
LIST_TAGS = frozenset({"ul", "ol"})
TABLE_CELL_TAGS = frozenset({"th", "td"})
TABLE_SECTION_TAGS = frozenset({"thead", "tbody", "tfoot"})
STRONG_TAGS = frozenset({"strong", "b"})
EMPHASIS_TAGS = frozenset({"em", "i"})
STRIKETHROUGH_TAGS = frozenset({"del", "s"})

# Elements removed while building the markup tree from HTML
STRIPPED_HTML_ELEMENTS = frozenset({"script", "style"})

DEFAULT_HTML_PARSER = "html.parser"
FRAGMENT_ROOT_TAG = "#fragment"

CODE_LANGUAGE_PATTERN = re.compile(r"language-(\w+)")
CITATION_STUB_PATTERN = re.compile(r"\+\d")
EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")

# Site profile defaults
DEFAULT_PROFILE_NAME = "generic"
DEFAULT_CHROME_TAGS = ("button", "nav", "footer", "svg", "img")
DEFAULT_CHROME_CLASSES = ("sr-only",)
DEFAULT_CITATION_MIN_LENGTH = 40
DEFAULT_ARTIFACT_TITLE = "Artifact"

# Transcript assembly
USER_ROLE = "user"
USER_LABEL = "You"
DEFAULT_ASSISTANT_LABEL = "Assistant"
MAX_ATTACHMENT_NAME_LENGTH = 80
DEFAULT_IMAGE_ALT = "image"

# Logging
LOG_FORMAT = "%(levelname)s: %(message)s"
TRACE_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Configuration
CONFIG_FILENAMES = (".chat2md.toml", ".chat2md.yaml", ".chat2md.yml", ".chat2md.json")
PYPROJECT_SECTION = "chat2md"
PROFILE_ENV_VAR = "CHAT2MD_PROFILE"
