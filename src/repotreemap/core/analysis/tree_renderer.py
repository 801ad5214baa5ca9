from __future__ import annotations

"""
Tree Renderer.

Converts a Node hierarchy into a visual ASCII representation used for
log previews. Children keep the order assigned by the tree builder.
"""

from typing import List, Tuple

from repotreemap.domain.tree_models import Node
from repotreemap.infra.fs import utf8_safe

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(root: Node) -> List[str]:
    """
    Render the full tree, starting with the root line.

    Args:
        root: Tree root.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = [_label(root)]
    render_tree_structure(root, lines)
    return lines


def render_tree_structure(node: Node, lines: List[str], prefix: str = "") -> None:
    """
    Append the descendants of a node to the accumulator in pre-order.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested directories. Traversal uses an explicit stack, so
    arbitrarily deep trees render without hitting the recursion limit.

    Args:
        node: Node whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the first level of children.
    """
    stack: List[Tuple[Node, str, bool]] = []
    _push_children(stack, node, prefix)

    while stack:
        child, child_prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        lines.append(f"{child_prefix}{connector}{_label(child)}")

        if child.children:
            _push_children(stack, child, child_prefix + ("    " if is_last else "│   "))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _push_children(stack: List[Tuple[Node, str, bool]], node: Node, prefix: str) -> None:
    # Reversed so the first child is popped first
    total = len(node.children)
    for i in range(total - 1, -1, -1):
        stack.append((node.children[i], prefix, i == total - 1))


def _label(node: Node) -> str:
    name = utf8_safe(node.name)
    if node.is_dir:
        return f"{name}/"
    return f"{name} [{node.size} B]"
