#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Per-call rendering context threaded through the serializer recursion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from chat2md.nodes import ElementNode


@dataclass(frozen=True)
class RenderContext:
    """Immutable state for one position in the tree walk.

    Parameters
    ----------
    depth : int, default 0
        List nesting depth used for item indentation
    ancestors : tuple of ElementNode, default ()
        Enclosing elements, outermost first

    """

    depth: int = 0
    ancestors: tuple[ElementNode, ...] = ()

    def __post_init__(self) -> None:
        """Validate the nesting depth."""
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")

    def enter(self, node: ElementNode) -> "RenderContext":
        """Return the context for the children of ``node``."""
        return RenderContext(depth=self.depth, ancestors=self.ancestors + (node,))

    def at_depth(self, depth: int) -> "RenderContext":
        """Return a copy of this context with a different list depth."""
        return RenderContext(depth=depth, ancestors=self.ancestors)

    def closest(self, predicate: Callable[[ElementNode], bool]) -> Optional[ElementNode]:
        """Return the nearest enclosing element matching ``predicate``, or None."""
        for ancestor in reversed(self.ancestors):
            if predicate(ancestor):
                return ancestor
        return None

    def inside(self, tag: str) -> bool:
        """Return True if an enclosing element has the given tag."""
        return self.closest(lambda ancestor: ancestor.tag == tag) is not None
