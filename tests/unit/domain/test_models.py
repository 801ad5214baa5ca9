from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. FileMetadata construction from stat results.
2. Node traversal helpers.
3. PipelineResult factories (Success/Error).
4. Error taxonomy stages.
"""

import dataclasses
import os
import stat
from datetime import datetime, timezone
from pathlib import Path

import pytest

from repotreemap.domain.errors import (
    ConfigurationError,
    OutputError,
    SerializationError,
    TraversalError,
    TreeMapError,
)
from repotreemap.domain.pipeline_models import create_error_result, create_success_result
from repotreemap.domain.tree_models import FileMetadata, Node

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def _node(name: str, is_dir: bool = True, size: int = 0) -> Node:
    info = FileMetadata(name=name, size=size, mode=0, mod_time=_EPOCH, is_dir=is_dir)
    return Node(name=name, path=f"/{name}", info=info, size=size)


def test_file_metadata_from_stat(tmp_path: Path) -> None:
    f = tmp_path / "data.bin"
    f.write_bytes(b"abc")
    st = os.lstat(f)

    info = FileMetadata.from_stat("data.bin", st)

    assert info.name == "data.bin"
    assert info.size == 3
    assert info.is_dir is False
    assert stat.S_ISREG(info.mode)
    assert info.mod_time == datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)


def test_file_metadata_is_frozen() -> None:
    info = FileMetadata(name="x", size=1, mode=0, mod_time=_EPOCH, is_dir=False)
    with pytest.raises(dataclasses.FrozenInstanceError):
        info.size = 2  # type: ignore[misc]


def test_iter_nodes_is_preorder() -> None:
    root, a, b, c = _node("root"), _node("a"), _node("b"), _node("c")
    a.children.append(c)
    root.children.extend([a, b])

    assert [n.name for n in root.iter_nodes()] == ["root", "a", "c", "b"]


def test_is_root_uses_parent_key() -> None:
    node = _node("child")
    assert node.is_root
    node.parent_path = "/root"
    assert not node.is_root


def test_create_success_result_populates_fields(mock_config_dict) -> None:
    result = create_success_result(
        cfg=mock_config_dict,
        repository="/tmp/repo",
        output_file="/tmp/tree.json",
        bytes_written=120,
        summary_extra={"nodes": 3},
    )

    assert result.ok is True
    assert result.error == ""
    assert result.stage == ""
    assert result.colorized is True
    assert result.bytes_written == 120
    assert result.summary == {"nodes": 3}
    assert result.tree_lines == []


def test_create_error_result_falls_back_to_config_paths(mock_config_dict) -> None:
    result = create_error_result("boom", "traversal", mock_config_dict)

    assert result.ok is False
    assert result.error == "boom"
    assert result.stage == "traversal"
    assert result.repository == mock_config_dict["repository"]
    assert result.output_file == mock_config_dict["output_file"]
    assert result.bytes_written == 0


@pytest.mark.parametrize("exc_cls, stage", [
    (ConfigurationError, "config"),
    (TraversalError, "traversal"),
    (SerializationError, "serialization"),
    (OutputError, "output"),
])
def test_error_stages(exc_cls, stage) -> None:
    err = exc_cls("failure")
    assert isinstance(err, TreeMapError)
    assert err.stage == stage
