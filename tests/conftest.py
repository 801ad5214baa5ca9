from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared filesystem fixtures used across unit and integration tests.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List

import pytest

DEEP_LEVELS = 1200

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from repotreemap.domain.tree_models import FileMetadata, Node  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def small_repo(tmp_path: Path) -> Path:
    """
    Minimal repository.

    Structure:
    /repo
      a.txt   (10 bytes)
      /sub    (empty)
    """
    root = tmp_path / "repo"
    root.mkdir()
    (root / "a.txt").write_bytes(b"0123456789")
    (root / "sub").mkdir()
    return root


@pytest.fixture
def project_repo(tmp_path: Path) -> Path:
    """
    Repository with nested sources and excluded folders.

    Structure:
    /project
      .git/HEAD
      .gitignore
      README.md
      build/out.bin
      src/main.py
      src/utils/helper.py
      src/build/generated.py
    """
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (root / ".gitignore").write_text("*.pyc\n", encoding="utf-8")
    (root / "README.md").write_text("# Project\n", encoding="utf-8")

    (root / "build").mkdir()
    (root / "build" / "out.bin").write_bytes(b"\x00" * 64)

    (root / "src" / "utils").mkdir(parents=True)
    (root / "src" / "build").mkdir()
    (root / "src" / "main.py").write_text("print('hi')\n", encoding="utf-8")
    (root / "src" / "utils" / "helper.py").write_text("def helper(): pass\n", encoding="utf-8")
    (root / "src" / "build" / "generated.py").write_text("X = 1\n", encoding="utf-8")
    return root


@pytest.fixture
def deep_repo(tmp_path: Path) -> Iterator[Path]:
    """
    Repository made of a single chain of DEEP_LEVELS nested directories,
    with one 4-byte file at the bottom.

    The chain is removed bottom-up on teardown, since recursive tree removal
    would exceed the interpreter recursion limit on some versions.
    """
    root = tmp_path / "deep"
    root.mkdir()

    created: List[Path] = []
    current = root
    for _ in range(DEEP_LEVELS):
        current = current / "d"
        current.mkdir()
        created.append(current)
    leaf = current / "leaf.txt"
    leaf.write_bytes(b"leaf")

    yield root

    leaf.unlink()
    for directory in reversed(created):
        directory.rmdir()


@pytest.fixture
def non_utf8_repo(tmp_path: Path) -> Path:
    """
    Repository holding a file whose name is not valid UTF-8.

    Structure:
    /raw
      bad<0xFF>.txt (3 bytes)
      ok.txt        (2 bytes)
    """
    if os.name != "posix":
        pytest.skip("Byte-level file names require a POSIX filesystem.")

    root = tmp_path / "raw"
    root.mkdir()
    (root / "ok.txt").write_bytes(b"ok")
    try:
        with open(os.path.join(os.fsencode(root), b"bad\xff.txt"), "wb") as fh:
            fh.write(b"bad")
    except OSError:
        pytest.skip("Filesystem rejects file names that are not valid UTF-8.")
    return root


@pytest.fixture
def node_chain() -> Callable[[int], Node]:
    """
    Factory building an in-memory chain of nested directory nodes.

    Paths stay flat (/chain/nK) so memory does not grow with depth squared.
    """
    epoch = datetime.fromtimestamp(0, tz=timezone.utc)

    def build(depth: int) -> Node:
        root = Node(name="n0", path="/n0", info=FileMetadata("n0", 0, 0, epoch, True))
        current = root
        for i in range(1, depth + 1):
            name = f"n{i}"
            child = Node(
                name=name,
                path=f"/chain/{name}",
                info=FileMetadata(name, 0, 0, epoch, True),
                parent_path=current.path,
                parent_name=current.name,
            )
            current.children.append(child)
            current = child
        return root

    return build


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "repository": str(tmp_path / "repo"),
        "output_file": str(tmp_path / "tree.json"),
        "use_default_excludes": True,
        "extra_exclude_prefixes": [],
        "colorize": True,
        "color_step": 4,
        "indent": None,
        "print_tree": False,
    }
