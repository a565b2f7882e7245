#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Assemble serialized conversation turns into one Markdown transcript.

Locating turns inside a page is the caller's job. This module takes turns
that are already found and classified by role and lays them out as::

    # Title

    ## You

    <user message>

    ---

    ## Claude

    > Thinking: <summary>

    <response>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from chat2md.constants import (
    BLANK_LINE,
    DEFAULT_IMAGE_ALT,
    MAX_ATTACHMENT_NAME_LENGTH,
    TRANSCRIPT_SEPARATOR,
    USER_LABEL,
    USER_ROLE,
)
from chat2md.nodes import ElementNode, MarkupNode, TextNode, text_content
from chat2md.normalize import finalize_markdown
from chat2md.profiles import SiteProfile, get_profile
from chat2md.serializer import MarkdownSerializer

logger = logging.getLogger(__name__)

TurnContent = Union[MarkupNode, str, Sequence[Union[MarkupNode, str]], None]


def _as_nodes(content: TurnContent) -> tuple[MarkupNode, ...]:
    if content is None:
        return ()
    if isinstance(content, str):
        return (TextNode(content),)
    if isinstance(content, (TextNode, ElementNode)):
        return (content,)
    return tuple(TextNode(item) if isinstance(item, str) else item for item in content)


@dataclass(frozen=True)
class Turn:
    """One conversation turn, already located and classified.

    Parameters
    ----------
    role : str or None
        ``"user"`` for the human side; any other non-empty role is rendered
        with the profile's assistant label. Turns without a role are skipped.
    content : MarkupNode, str or sequence of them, default ()
        Message body segments (e.g. the rounds of a multi-step response)
    thinking : tuple of str, default ()
        Thinking summaries shown above the body
    attachments : tuple of str, default ()
        Names of attached files
    images : tuple of str, default ()
        Alt texts of attached images

    """

    role: Optional[str]
    content: TurnContent = ()
    thinking: tuple[str, ...] = ()
    attachments: tuple[str, ...] = ()
    images: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Normalize content and string sequences to tuples."""
        object.__setattr__(self, "content", _as_nodes(self.content))
        for name in ("thinking", "attachments", "images"):
            value = getattr(self, name)
            object.__setattr__(self, name, (value,) if isinstance(value, str) else tuple(value))

    @property
    def is_user(self) -> bool:
        """Return True for the human side of the conversation."""
        return (self.role or "").strip().lower() == USER_ROLE


def _quote_block(lines: list[str]) -> str:
    if not lines:
        return ""
    return "\n".join(lines) + BLANK_LINE


def _attachment_lines(turn: Turn) -> list[str]:
    lines = []
    for name in turn.attachments:
        first_line = name.strip().split("\n")[0] or "Attachment"
        lines.append(f"> 📎 **{first_line[:MAX_ATTACHMENT_NAME_LENGTH]}** (attachment)")
    return lines


def _image_lines(turn: Turn) -> list[str]:
    return [f"> 🖼️ **{alt or DEFAULT_IMAGE_ALT}** (image attachment)" for alt in turn.images]


def _thinking_lines(turn: Turn) -> list[str]:
    return [f"> Thinking: {summary.strip()}" for summary in turn.thinking if summary.strip()]


def render_turn(turn: Turn, profile: SiteProfile | str | None = None) -> str:
    """Render one turn as a ``## <label>`` section.

    Parameters
    ----------
    turn : Turn
        The turn to render
    profile : SiteProfile or str, optional
        Profile supplying the serializer rules and the assistant label

    Returns
    -------
    str
        The section text, without surrounding separators

    """
    profile = get_profile(profile)
    serializer = MarkdownSerializer(profile)
    label = USER_LABEL if turn.is_user else profile.assistant_label

    segments = [finalize_markdown(serializer.serialize(node)) for node in turn.content]
    body = BLANK_LINE.join(segment for segment in segments if segment)
    if not body and turn.content:
        # nothing survived conversion; fall back to the raw text
        body = BLANK_LINE.join(text_content(node).strip() for node in turn.content if text_content(node).strip())

    preamble = (
        _quote_block(_attachment_lines(turn)) + _quote_block(_image_lines(turn)) + _quote_block(_thinking_lines(turn))
    )
    return f"## {label}{BLANK_LINE}{preamble}{body}"


def join_sections(sections: Iterable[str]) -> str:
    """Join Markdown sections with a horizontal-rule separator."""
    return TRANSCRIPT_SEPARATOR.join(sections)


def render_transcript(
    turns: Iterable[Turn],
    title: Optional[str] = None,
    profile: SiteProfile | str | None = None,
) -> str:
    """Render a whole conversation as one Markdown document.

    Parameters
    ----------
    turns : iterable of Turn
        Turns in conversation order
    title : str, optional
        Conversation title, rendered as a level-1 heading
    profile : SiteProfile or str, optional
        Site profile for serialization and labels

    Returns
    -------
    str
        All sections joined with ``---`` separators

    """
    profile = get_profile(profile)
    sections: list[str] = []
    if title and title.strip():
        sections.append(f"# {title.strip()}")

    rendered = 0
    for turn in turns:
        if not (turn.role or "").strip():
            logger.debug("Skipping turn without a role")
            continue
        sections.append(render_turn(turn, profile))
        rendered += 1

    logger.debug("Rendered transcript with %d turn(s)", rendered)
    return join_sections(sections)


__all__ = ["Turn", "join_sections", "render_transcript", "render_turn"]
