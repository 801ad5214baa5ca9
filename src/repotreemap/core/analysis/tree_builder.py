from __future__ import annotations

"""
Directory Tree Builder.

Walks a filesystem subtree once, creates a Node per entry keyed by its
absolute path, then links every node to its parent by path lookup. Any
traversal failure aborts the whole build: no partial tree is returned.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional

from repotreemap.core.analysis.filters import (
    is_excluded,
    normalize_prefixes,
    relative_key,
)
from repotreemap.domain.errors import TraversalError
from repotreemap.domain.tree_models import FileMetadata, Node

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(root: str, exclude_prefixes: Optional[Iterable[str]] = None) -> Node:
    """
    Build the Node hierarchy rooted at the given path.

    Args:
        root: Directory (or single file) to scan. Relative paths are resolved
              against the current working directory.
        exclude_prefixes: Root-relative path prefixes to skip. None or an
                          empty collection disables filtering.

    Returns:
        Node: The root node with all descendants attached.

    Raises:
        TraversalError: If any entry cannot be read.
    """
    abs_root = os.path.abspath(root)
    logger.info(f"Scanning repository: {abs_root}")

    nodes = scan_entries(abs_root, exclude_prefixes)
    tree = link_nodes(nodes)

    logger.debug(f"Tree built: {len(nodes)} nodes under '{tree.path}'")
    return tree


def scan_entries(root: str, exclude_prefixes: Optional[Iterable[str]] = None) -> Dict[str, Node]:
    """
    Traverse the subtree and map every visited entry to an unlinked Node.

    Entries are visited in lexical order within each directory. Excluded
    directories are pruned from the walk. Symbolic links are recorded but
    never followed.

    Args:
        root: Path to scan.
        exclude_prefixes: Root-relative prefixes to skip.

    Returns:
        Dict[str, Node]: Insertion-ordered mapping of absolute path to Node.

    Raises:
        TraversalError: On the first unreadable entry.
    """
    abs_root = os.path.abspath(root)
    prefixes = normalize_prefixes(exclude_prefixes)

    nodes: Dict[str, Node] = {}
    root_info = _read_metadata(abs_root, os.path.basename(abs_root) or abs_root)
    nodes[abs_root] = _make_node(abs_root, root_info)

    if not root_info.is_dir:
        return nodes

    # Explicit stack: depth is bounded by the filesystem, not the interpreter
    pending: List[str] = [abs_root]
    while pending:
        current = pending.pop()
        subdirs: List[str] = []

        for name in _list_dir(current):
            path = os.path.join(current, name)
            info = _read_metadata(path, name)

            if is_excluded(relative_key(abs_root, path, info.is_dir), prefixes):
                logger.debug(f"Excluded: {path}")
                continue

            nodes[path] = _make_node(path, info)
            # lstat never reports a symlink as a directory, so links are not followed
            if info.is_dir:
                subdirs.append(path)

        pending.extend(reversed(subdirs))

    return nodes


def link_nodes(nodes: Dict[str, Node]) -> Node:
    """
    Attach each node to its parent and return the root.

    The root is the only node whose parent directory is absent from the map.

    Args:
        nodes: Mapping produced by scan_entries().

    Returns:
        Node: The root node.

    Raises:
        TraversalError: If the map is empty or has more than one root.
    """
    root: Optional[Node] = None

    for path, node in nodes.items():
        parent_path = os.path.dirname(path)
        parent = nodes.get(parent_path) if parent_path != path else None

        if parent is None:
            if root is not None:
                raise TraversalError(f"Disconnected entry found: {path}", path=path)
            root = node
            continue

        node.parent_path = parent_path
        node.parent_name = parent.name
        parent.children.append(node)

    if root is None:
        raise TraversalError("No entries were discovered.")
    return root

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _make_node(path: str, info: FileMetadata) -> Node:
    return Node(
        name=info.name,
        path=path,
        info=info,
        size=0 if info.is_dir else info.size,
    )


def _read_metadata(path: str, name: str) -> FileMetadata:
    """Capture lstat metadata, translating OS failures into TraversalError."""
    try:
        st = os.lstat(path)
    except OSError as e:
        raise TraversalError(f"Cannot read '{path}': {e.strerror or e}", path=path) from e
    return FileMetadata.from_stat(name, st)


def _list_dir(path: str) -> List[str]:
    """Return the entry names of a directory in lexical order."""
    try:
        return sorted(os.listdir(path))
    except OSError as e:
        raise TraversalError(f"Cannot list '{path}': {e.strerror or e}", path=path) from e
