from __future__ import annotations

"""
Tree Statistics.

Read-only aggregations over a built tree. Directory rollups are computed
on demand here and never stored back into Node.size.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple

from repotreemap.domain.tree_models import Node


@dataclass(frozen=True)
class TreeStats:
    """
    Attributes:
        nodes: Total entries, root included.
        files: Non-directory entries.
        dirs: Directory entries, root included when it is a directory.
        total_bytes: Sum of file sizes.
        max_depth: Depth of the deepest node (root is 0).
    """
    nodes: int
    files: int
    dirs: int
    total_bytes: int
    max_depth: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_stats(root: Node) -> TreeStats:
    """Walk the tree once and collect entry counts and sizes."""
    nodes = files = dirs = total = max_depth = 0

    stack: List[Tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        nodes += 1
        max_depth = max(max_depth, depth)
        if node.is_dir:
            dirs += 1
        else:
            files += 1
            total += node.size
        stack.extend((child, depth + 1) for child in node.children)

    return TreeStats(nodes=nodes, files=files, dirs=dirs, total_bytes=total, max_depth=max_depth)


def directory_size(node: Node) -> int:
    """Sum of file sizes reachable from the node."""
    return sum(n.size for n in node.iter_nodes() if not n.is_dir)
