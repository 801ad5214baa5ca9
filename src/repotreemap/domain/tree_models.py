from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the node types used by the tree builder to represent a scanned
filesystem subtree. Ownership flows strictly from root to leaves: a node
owns its children, and refers back to its parent only by path key.
"""

import os
import stat
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, List, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileMetadata:
    """
    Snapshot of a filesystem entry captured once at traversal time.

    Attributes:
        name: Base name of the entry.
        size: Size in bytes as reported by lstat.
        mode: Raw mode bits (file type and permissions).
        mod_time: Last modification time (UTC).
        is_dir: Whether the entry is a real directory (symlinks are not).
    """
    name: str
    size: int
    mode: int
    mod_time: datetime
    is_dir: bool

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> "FileMetadata":
        """Build metadata from an lstat result."""
        return cls(
            name=name,
            size=int(st.st_size),
            mode=int(st.st_mode),
            mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            is_dir=stat.S_ISDIR(st.st_mode),
        )

    @property
    def permissions(self) -> str:
        """Symbolic permission string, e.g. 'drwxr-xr-x'."""
        return stat.filemode(self.mode)


@dataclass
class Node:
    """
    One filesystem entry in the in-memory tree.

    Attributes:
        name: Base name of the entry.
        path: Absolute filesystem path.
        info: Metadata captured during traversal.
        size: Byte length for files, 0 for directories.
        children: Ordered child nodes (owned).
        parent_path: Key of the parent node in the path map (None for root).
        parent_name: Name of the parent node (empty for root).
        color: Greyscale color assigned by the coloring pass, if any.
    """
    name: str
    path: str
    info: FileMetadata
    size: int = 0
    children: List["Node"] = field(default_factory=list)
    parent_path: Optional[str] = None
    parent_name: str = ""
    color: Optional[str] = None

    @property
    def is_dir(self) -> bool:
        return self.info.is_dir

    @property
    def is_root(self) -> bool:
        return self.parent_path is None

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield this node and all descendants in pre-order."""
        stack: List[Node] = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))
