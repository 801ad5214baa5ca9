from __future__ import annotations

"""
Error Taxonomy.

Every failure in the tree mapping workflow is terminal. Each error class
names the pipeline stage it aborts so the interface layer can report it.
"""

from typing import Optional


class TreeMapError(Exception):
    """Base class for all repotreemap failures."""

    stage: str = "unknown"


class ConfigurationError(TreeMapError):
    """Missing or malformed runtime configuration."""

    stage = "config"


class TraversalError(TreeMapError):
    """
    Filesystem walk failure (permission denied, missing path, I/O error).

    Attributes:
        path: Entry that could not be read, when known.
    """

    stage = "traversal"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SerializationError(TreeMapError):
    """The node tree could not be encoded or decoded."""

    stage = "serialization"


class OutputError(TreeMapError):
    """
    The encoded document could not be persisted.

    Attributes:
        path: Destination file path.
    """

    stage = "output"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
