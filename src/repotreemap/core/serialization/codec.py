from __future__ import annotations

"""
Tree JSON Codec.

Maps the Node hierarchy to the visualization document format and back.

Wire format (one object per node):
    name      Entry name (omitted when empty).
    value     Size in bytes (omitted when zero, so directories carry none).
    path      Absolute filesystem path.
    color     Depth color (omitted when the coloring pass did not run).
    children  Nested child objects (omitted when empty).

Parent linkage and raw filesystem metadata stay internal and are never
written. Name bytes that are not valid UTF-8 are written as U+FFFD.
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from repotreemap.core.analysis.stats import compute_stats
from repotreemap.domain.errors import OutputError, SerializationError
from repotreemap.domain.tree_models import FileMetadata, Node
from repotreemap.infra.fs import atomic_write_bytes, utf8_safe

logger = logging.getLogger(__name__)

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)

# Frames per tree level used by the C json codec (one object, one list)
_FRAMES_PER_LEVEL = 2

# -----------------------------------------------------------------------------
# ENCODING
# -----------------------------------------------------------------------------

def node_to_dict(node: Node) -> Dict[str, Any]:
    """
    Convert a node and its subtree into plain JSON-compatible data.

    Args:
        node: Subtree root.

    Returns:
        Dict[str, Any]: Wire representation of the subtree.
    """
    root_data = _wire_fields(node)

    stack: List[Tuple[Node, Dict[str, Any]]] = [(node, root_data)]
    while stack:
        current, data = stack.pop()
        if current.children:
            children = [_wire_fields(child) for child in current.children]
            data["children"] = children
            stack.extend(zip(current.children, children))

    return root_data


def encode_tree(node: Node, indent: Optional[int] = None) -> bytes:
    """
    Serialize the tree into a UTF-8 JSON document.

    Args:
        node: Tree root.
        indent: Pretty-print indentation (None produces compact output).

    Returns:
        bytes: Encoded document.

    Raises:
        SerializationError: If the tree cannot be encoded.
    """
    data = node_to_dict(node)
    depth = compute_stats(node).max_depth

    try:
        with _nesting_headroom(depth):
            text = json.dumps(data, ensure_ascii=False, indent=indent)
        return text.encode("utf-8")
    except (TypeError, ValueError, RecursionError, UnicodeEncodeError) as e:
        raise SerializationError(f"Failed to encode tree rooted at '{node.path}': {e}") from e

# -----------------------------------------------------------------------------
# DECODING
# -----------------------------------------------------------------------------

def node_from_dict(data: Dict[str, Any], parent: Optional[Node] = None) -> Node:
    """
    Rebuild a Node subtree from its wire representation.

    Metadata is not part of the document, so decoded nodes carry a minimal
    FileMetadata: entries with children or no value are treated as
    directories.

    Args:
        data: Decoded JSON object.
        parent: Already rebuilt parent node, if any.

    Returns:
        Node: The rebuilt subtree.

    Raises:
        SerializationError: If a required field is missing or mistyped.
    """
    root = _node_from_fields(data, parent)

    stack: List[Tuple[Node, Dict[str, Any]]] = [(root, data)]
    while stack:
        node, raw = stack.pop()
        for raw_child in raw.get("children", []):
            child = _node_from_fields(raw_child, node)
            node.children.append(child)
            stack.append((child, raw_child))

    return root


def decode_tree(payload: Union[bytes, str]) -> Node:
    """
    Parse a JSON document produced by encode_tree().

    Raises:
        SerializationError: If the payload is not a valid tree document.
    """
    marker = b'"children"' if isinstance(payload, bytes) else '"children"'
    # Nesting depth cannot exceed the number of children arrays
    depth_bound = payload.count(marker)

    try:
        with _nesting_headroom(depth_bound):
            data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        raise SerializationError(f"Invalid tree document: {e}") from e
    return node_from_dict(data)

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def write_tree(path: str, payload: bytes) -> int:
    """
    Persist an encoded document to disk.

    Args:
        path: Destination file.
        payload: Output of encode_tree().

    Returns:
        int: Bytes written.

    Raises:
        OutputError: If the file cannot be written. The destination is left
                     untouched in that case.
    """
    try:
        written = atomic_write_bytes(path, payload)
    except OSError as e:
        raise OutputError(f"Failed to write '{path}': {e.strerror or e}", path=path) from e

    logger.info(f"Tree saved to file: {path}")
    return written

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _wire_fields(node: Node) -> Dict[str, Any]:
    """Scalar fields of one node; children are attached by the caller."""
    data: Dict[str, Any] = {}
    if node.name:
        data["name"] = utf8_safe(node.name)
    if node.size:
        data["value"] = node.size
    data["path"] = utf8_safe(node.path)
    if node.color is not None:
        data["color"] = node.color
    return data


def _node_from_fields(data: Any, parent: Optional[Node]) -> Node:
    """Validate one wire object and build its Node without children."""
    if not isinstance(data, dict):
        raise SerializationError(f"Expected a JSON object, received {type(data).__name__}.")

    path = data.get("path")
    if not isinstance(path, str):
        raise SerializationError("Node is missing a string 'path' field.")

    name = data.get("name") or os.path.basename(path)
    size = data.get("value", 0)
    raw_children = data.get("children", [])
    if not isinstance(size, int) or not isinstance(raw_children, list):
        raise SerializationError(f"Malformed node at '{path}'.")

    is_dir = bool(raw_children) or size == 0
    return Node(
        name=name,
        path=path,
        info=FileMetadata(name=name, size=size, mode=0, mod_time=_EPOCH, is_dir=is_dir),
        size=size,
        parent_path=parent.path if parent else None,
        parent_name=parent.name if parent else "",
        color=data.get("color"),
    )


@contextmanager
def _nesting_headroom(levels: int) -> Iterator[None]:
    """
    Temporarily raise the interpreter recursion limit for the json module.

    The C encoder and decoder recurse once per nested container, so a deep
    tree needs more headroom than the default limit allows.
    """
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(previous + _FRAMES_PER_LEVEL * levels)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
