from __future__ import annotations

"""
Path Exclusion Engine.

Implements prefix-based exclusion of filesystem entries. Prefixes are
matched against the entry path relative to the scanned root, always using
'/' separators; directories are matched with a trailing '/' so that a
prefix such as 'build/' prunes the whole 'build' directory.
"""

import os
from typing import Iterable, List, Optional

from repotreemap.domain.constants import DEFAULT_EXCLUDED_PREFIXES

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_exclude_prefixes() -> List[str]:
    """
    Get the built-in exclusion prefixes.

    Covers VCS metadata and common build/dependency output folders.

    Returns:
        List[str]: Fresh list of default prefixes.
    """
    return list(DEFAULT_EXCLUDED_PREFIXES)


def normalize_prefixes(prefixes: Optional[Iterable[str]]) -> List[str]:
    """
    Clean a raw prefix collection.

    Converts OS separators to '/', strips whitespace and leading './',
    drops empty entries and duplicates while keeping the original order.

    Args:
        prefixes: Raw prefixes (None means no filtering).

    Returns:
        List[str]: Normalized prefixes.
    """
    if not prefixes:
        return []

    out: List[str] = []
    for raw in prefixes:
        p = str(raw).strip().replace("\\", "/")
        while p.startswith("./"):
            p = p[2:]
        if p and p not in out:
            out.append(p)
    return out

# -----------------------------------------------------------------------------
# MATCHING
# -----------------------------------------------------------------------------

def relative_key(root: str, path: str, is_dir: bool) -> str:
    """
    Compute the match key of an entry under the scanned root.

    Args:
        root: Absolute root path.
        path: Absolute entry path.
        is_dir: Whether the entry is a directory.

    Returns:
        str: Root-relative '/'-separated path ('' for the root itself).
    """
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        return ""
    rel = rel.replace(os.sep, "/")
    return rel + "/" if is_dir else rel


def is_excluded(key: str, prefixes: List[str]) -> bool:
    """
    Verify if a relative key starts with at least one exclusion prefix.

    Args:
        key: Key produced by relative_key().
        prefixes: Normalized exclusion prefixes.

    Returns:
        bool: True if the entry must be dropped. The root key never matches.
    """
    if not key:
        return False
    return any(key.startswith(p) for p in prefixes)
