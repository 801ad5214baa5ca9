from __future__ import annotations

"""
Unit tests for the Tree JSON Codec.

Verifies the wire schema, decoding of produced documents, and the
all-or-nothing persistence behavior.
"""

import json
import os
import sys
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from repotreemap.core.analysis.colorizer import color_tree
from repotreemap.core.analysis.tree_builder import build_tree
from repotreemap.core.serialization.codec import (
    decode_tree,
    encode_tree,
    node_from_dict,
    node_to_dict,
    write_tree,
)
from repotreemap.domain.errors import OutputError, SerializationError
from repotreemap.domain.tree_models import Node


# -----------------------------------------------------------------------------
# ENCODING
# -----------------------------------------------------------------------------

def test_wire_schema_small_repo(small_repo: Path) -> None:
    root = build_tree(str(small_repo))
    color_tree(root)

    assert node_to_dict(root) == {
        "name": "repo",
        "path": str(small_repo),
        "color": "hsl(0, 0%, 96%)",
        "children": [
            {
                "name": "a.txt",
                "value": 10,
                "path": str(small_repo / "a.txt"),
                "color": "hsl(0, 0%, 92%)",
            },
            {
                "name": "sub",
                "path": str(small_repo / "sub"),
                "color": "hsl(0, 0%, 92%)",
            },
        ],
    }


def test_internal_fields_are_not_serialized(small_repo: Path) -> None:
    root = build_tree(str(small_repo))
    data = json.loads(encode_tree(root))

    child = data["children"][0]
    for internal in ("parent", "parent_path", "parent_name", "info", "mode", "mod_time"):
        assert internal not in data
        assert internal not in child
    # Coloring did not run
    assert "color" not in data


def test_encode_indent_and_unicode(tmp_path: Path) -> None:
    root_dir = tmp_path / "datos"
    root_dir.mkdir()
    (root_dir / "canción.txt").write_text("la", encoding="utf-8")

    payload = encode_tree(build_tree(str(root_dir)), indent=2)
    text = payload.decode("utf-8")

    assert "canción.txt" in text
    assert text.startswith("{\n  ")


def test_encode_failure_raises_serialization_error(small_repo: Path) -> None:
    root = build_tree(str(small_repo))
    root.color = object()  # type: ignore[assignment]

    with pytest.raises(SerializationError):
        encode_tree(root)


def test_undecodable_names_are_replaced(non_utf8_repo: Path) -> None:
    """Name bytes that are not UTF-8 become U+FFFD instead of failing the encode."""
    data = json.loads(encode_tree(build_tree(str(non_utf8_repo))).decode("utf-8"))

    bad, ok = data["children"]
    assert bad["name"] == "bad�.txt"
    assert bad["path"] == str(non_utf8_repo) + os.sep + "bad�.txt"
    assert bad["value"] == 3
    assert ok["name"] == "ok.txt"


def test_deep_tree_round_trip(node_chain: Callable[[int], Node]) -> None:
    """Nesting beyond the default recursion limit encodes and decodes."""
    limit = sys.getrecursionlimit()
    root = node_chain(700)

    decoded = decode_tree(encode_tree(root))

    paths = [n.path for n in decoded.iter_nodes()]
    assert paths == [n.path for n in root.iter_nodes()]
    assert decoded.children[0].parent_path == "/n0"
    assert sys.getrecursionlimit() == limit

# -----------------------------------------------------------------------------
# DECODING
# -----------------------------------------------------------------------------

def test_decoded_tree_matches_built_tree(project_repo: Path) -> None:
    """Decoding the document yields the same node count, paths, and sizes."""
    built = build_tree(str(project_repo), [])
    color_tree(built)

    decoded = decode_tree(encode_tree(built))

    def index(root):
        return {n.path: n.size for n in root.iter_nodes()}

    assert index(decoded) == index(built)
    assert len(list(decoded.iter_nodes())) == len(list(built.iter_nodes()))
    assert decoded.color == built.color


def test_decoded_nodes_carry_parent_keys(small_repo: Path) -> None:
    decoded = decode_tree(encode_tree(build_tree(str(small_repo))))

    assert decoded.is_root
    for child in decoded.children:
        assert child.parent_path == decoded.path
        assert child.parent_name == "repo"


@pytest.mark.parametrize("payload", [
    b"not json",
    b"[1, 2]",
    b'{"name": "x"}',
    b'{"path": "/x", "value": "big"}',
    b'{"path": "/x", "children": {}}',
])
def test_decode_rejects_malformed_documents(payload: bytes) -> None:
    with pytest.raises(SerializationError):
        decode_tree(payload)


def test_node_from_dict_infers_name_from_path() -> None:
    node = node_from_dict({"path": "/repo/file.txt", "value": 3})
    assert node.name == "file.txt"
    assert not node.is_dir

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def test_write_tree_creates_file(tmp_path: Path) -> None:
    out = tmp_path / "tree.json"
    written = write_tree(str(out), b'{"path": "/"}')

    assert written == 13
    assert out.read_bytes() == b'{"path": "/"}'
    assert [p.name for p in tmp_path.iterdir()] == ["tree.json"]


def test_write_tree_missing_parent_raises(tmp_path: Path) -> None:
    out = tmp_path / "missing" / "tree.json"
    with pytest.raises(OutputError) as exc:
        write_tree(str(out), b"{}")

    assert exc.value.path == str(out)
    assert not out.exists()


def test_failed_write_keeps_previous_file(tmp_path: Path) -> None:
    out = tmp_path / "tree.json"
    out.write_bytes(b"previous")

    with patch("repotreemap.infra.fs.os.replace", side_effect=OSError(28, "No space left on device")):
        with pytest.raises(OutputError):
            write_tree(str(out), b"new content")

    assert out.read_bytes() == b"previous"
    # Temporary file is cleaned up
    assert sorted(os.listdir(tmp_path)) == ["tree.json"]


def test_write_to_directory_path_raises(tmp_path: Path) -> None:
    with pytest.raises(OutputError):
        write_tree(str(tmp_path), b"{}")
