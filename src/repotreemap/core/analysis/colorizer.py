from __future__ import annotations

"""
Depth Coloring Pass.

Annotates each node with a greyscale HSL color whose lightness decreases
by a fixed step per tree level, so deeper entries render darker.
"""

from typing import List, Tuple

from repotreemap.domain.constants import (
    COLOR_TEMPLATE,
    DEFAULT_COLOR_STEP,
    MAX_LIGHTNESS,
    MIN_LIGHTNESS,
)
from repotreemap.domain.tree_models import Node


def color_tree(node: Node, intensity: int = 0, step: int = DEFAULT_COLOR_STEP) -> None:
    """
    Assign depth-based colors to every node of the subtree.

    The intensity is incremented before coloring, so with the default step
    the root receives 96% lightness, its children 92%, and so on.

    Args:
        node: Subtree root to color in place.
        intensity: Intensity inherited from the parent level.
        step: Intensity added per level.
    """
    stack: List[Tuple[Node, int]] = [(node, intensity + step)]
    while stack:
        current, level = stack.pop()
        current.color = lightness_color(MAX_LIGHTNESS - level)
        stack.extend((child, level + step) for child in current.children)


def lightness_color(lightness: int) -> str:
    """Format a greyscale color, clamping lightness to [0, 100]."""
    clamped = max(MIN_LIGHTNESS, min(MAX_LIGHTNESS, lightness))
    return COLOR_TEMPLATE.format(lightness=clamped)
