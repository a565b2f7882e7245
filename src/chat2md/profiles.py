#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Site profiles: per-host rules injected into the Markdown serializer.

Chat front-ends wrap the same semantic markup in different decorative
chrome. Rather than keeping one converter per site, the serializer takes a
:class:`SiteProfile` describing which elements are noise, whether citation
stubs are dropped, and which host-specific constructs (artifact cards,
span-wrapped citation links) get special rendering.

Built-in profiles
-----------------
- ``generic``: chrome tags and screen-reader text only
- ``chatgpt``: adds the citation-stub link filter
- ``claude``: adds SVG path chrome, floating overlays, artifact references
  and span link unwrapping
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Sequence

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from chat2md.constants import (
    CITATION_STUB_PATTERN,
    DEFAULT_ASSISTANT_LABEL,
    DEFAULT_CHROME_CLASSES,
    DEFAULT_CHROME_TAGS,
    DEFAULT_CITATION_MIN_LENGTH,
    DEFAULT_PROFILE_NAME,
)
from chat2md.exceptions import UnknownProfileError
from chat2md.nodes import ElementNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class SiteProfile(CloneFrozenMixin):
    """Rules describing one host page's markup conventions.

    Parameters
    ----------
    name : str
        Profile identifier used by :func:`get_profile` and the CLI
    assistant_label : str, default "Assistant"
        Section label used for non-user turns in transcripts
    chrome_tags : tuple of str
        Tags skipped entirely, children included
    chrome_classes : tuple of str
        Classes marking an element of any tag as chrome
    overlay_classes : tuple of str, default ()
        Classes marking a ``div`` as a floating overlay (always skipped)
    overlay_label_classes : tuple of str, default ()
        Classes marking a ``div`` as a code-block label; skipped only when the
        div sits inside one of the overlay label scopes below
    overlay_label_scope_tags : tuple of str, default ()
        Ancestor tags that scope the overlay labels
    overlay_label_scope_classes : tuple of str, default ()
        Ancestor classes that scope the overlay labels
    overlay_label_scope_class_fragments : tuple of str, default ()
        Substrings of an ancestor's class attribute that scope the overlay labels
    artifact_class : str or None, default None
        Class marking an artifact reference card; None disables artifacts
    artifact_title_fragment : str, default ""
        Class substring of the descendant holding the artifact title
    artifact_type_fragment : str, default ""
        Class substring of the descendant holding the artifact type
    filter_citation_links : bool, default False
        Drop links whose text looks like a "+N more" citation stub
    citation_min_length : int, default 40
        Link text must be longer than this to count as a citation stub
    unwrap_span_links : bool, default False
        Render a span containing a link as that link alone

    """

    name: str = field(default=DEFAULT_PROFILE_NAME, metadata={"help": "Profile name"})
    assistant_label: str = field(
        default=DEFAULT_ASSISTANT_LABEL, metadata={"help": "Section label for assistant turns"}
    )
    chrome_tags: tuple[str, ...] = field(
        default=DEFAULT_CHROME_TAGS, metadata={"help": "Tags skipped together with their children"}
    )
    chrome_classes: tuple[str, ...] = field(
        default=DEFAULT_CHROME_CLASSES, metadata={"help": "Classes that mark an element as chrome"}
    )
    overlay_classes: tuple[str, ...] = ()
    overlay_label_classes: tuple[str, ...] = ()
    overlay_label_scope_tags: tuple[str, ...] = ()
    overlay_label_scope_classes: tuple[str, ...] = ()
    overlay_label_scope_class_fragments: tuple[str, ...] = ()
    artifact_class: str | None = None
    artifact_title_fragment: str = ""
    artifact_type_fragment: str = ""
    filter_citation_links: bool = field(
        default=False, metadata={"help": "Drop '+N more' citation stub links", "importance": "core"}
    )
    citation_min_length: int = field(
        default=DEFAULT_CITATION_MIN_LENGTH,
        metadata={"help": "Minimum link text length for the citation filter", "type": int},
    )
    unwrap_span_links: bool = field(
        default=False, metadata={"help": "Render spans wrapping a link as the link itself"}
    )

    def __post_init__(self) -> None:
        """Normalize sequence fields and validate numeric ranges.

        Raises
        ------
        ValueError
            If ``citation_min_length`` is negative.

        """
        for name in (
            "chrome_tags",
            "chrome_classes",
            "overlay_classes",
            "overlay_label_classes",
            "overlay_label_scope_tags",
            "overlay_label_scope_classes",
            "overlay_label_scope_class_fragments",
        ):
            value = getattr(self, name)
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, name, tuple(value))

        if self.citation_min_length < 0:
            raise ValueError(f"citation_min_length must be non-negative, got {self.citation_min_length}")

    def is_chrome(self, node: ElementNode, ancestors: Sequence[ElementNode] = ()) -> bool:
        """Return True if ``node`` is decorative chrome that must not be rendered.

        Parameters
        ----------
        node : ElementNode
            Candidate element
        ancestors : sequence of ElementNode, default ()
            Enclosing elements, outermost first. An overlay label is chrome
            when it or one of these is a code-block scope

        Returns
        -------
        bool
            True when the element and its whole subtree should be skipped

        """
        if node.tag in self.chrome_tags:
            return True
        if any(node.has_class(name) for name in self.chrome_classes):
            return True
        if node.tag != "div":
            return False
        if any(node.has_class(name) for name in self.overlay_classes):
            return True
        if any(node.has_class(name) for name in self.overlay_label_classes):
            # the label itself may carry the scope class
            return any(self._is_label_scope(scope) for scope in (*ancestors, node))
        return False

    def _is_label_scope(self, ancestor: ElementNode) -> bool:
        return (
            ancestor.tag in self.overlay_label_scope_tags
            or any(ancestor.has_class(name) for name in self.overlay_label_scope_classes)
            or any(ancestor.class_contains(fragment) for fragment in self.overlay_label_scope_class_fragments)
        )

    def is_artifact(self, node: ElementNode) -> bool:
        """Return True if ``node`` is an artifact reference card."""
        return self.artifact_class is not None and node.has_class(self.artifact_class)

    def is_citation_stub(self, link_text: str) -> bool:
        """Return True if link text should be dropped as a citation stub."""
        if not self.filter_citation_links:
            return False
        return len(link_text) > self.citation_min_length and CITATION_STUB_PATTERN.search(link_text) is not None


GENERIC_PROFILE = SiteProfile()

CHATGPT_PROFILE = SiteProfile(
    name="chatgpt",
    assistant_label="ChatGPT",
    filter_citation_links=True,
)

CLAUDE_PROFILE = SiteProfile(
    name="claude",
    assistant_label="Claude",
    chrome_tags=DEFAULT_CHROME_TAGS + ("path",),
    overlay_classes=("sticky",),
    overlay_label_classes=("text-text-500",),
    overlay_label_scope_tags=("pre",),
    overlay_label_scope_classes=("overflow-x-auto",),
    overlay_label_scope_class_fragments=("group/copy",),
    artifact_class="artifact-block-cell",
    artifact_title_fragment="leading-tight",
    artifact_type_fragment="text-text-400",
    unwrap_span_links=True,
)

BUILTIN_PROFILES: dict[str, SiteProfile] = {
    profile.name: profile for profile in (GENERIC_PROFILE, CHATGPT_PROFILE, CLAUDE_PROFILE)
}


def get_profile(profile: SiteProfile | str | None = None) -> SiteProfile:
    """Resolve a profile name (or instance) to a :class:`SiteProfile`.

    Parameters
    ----------
    profile : SiteProfile, str or None, default None
        A profile instance (returned unchanged), a built-in profile name
        (case-insensitive), or None for the generic profile

    Returns
    -------
    SiteProfile
        The resolved profile

    Raises
    ------
    UnknownProfileError
        If the name does not match a built-in profile

    """
    if profile is None:
        return GENERIC_PROFILE
    if isinstance(profile, SiteProfile):
        return profile

    key = profile.strip().lower()
    try:
        resolved = BUILTIN_PROFILES[key]
    except KeyError:
        raise UnknownProfileError(profile, BUILTIN_PROFILES) from None
    logger.debug("Resolved site profile %r", resolved.name)
    return resolved


__all__ = [
    "BUILTIN_PROFILES",
    "CHATGPT_PROFILE",
    "CLAUDE_PROFILE",
    "GENERIC_PROFILE",
    "SiteProfile",
    "get_profile",
]
