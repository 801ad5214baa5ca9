from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structure and factory functions used to communicate
execution outcomes between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        stage: Pipeline stage that failed (empty on success).
        repository: Normalized root directory scanned.
        output_file: Absolute path of the JSON document.
        dry_run: Whether persistence was skipped.
        colorized: Whether the coloring pass ran.
        bytes_written: Size of the encoded document.
        tree_lines: ASCII preview lines, when requested.
        summary: Tree statistics (nodes, files, dirs, total_bytes, max_depth).
    """
    ok: bool
    error: str
    stage: str

    repository: str
    output_file: str

    dry_run: bool = False
    colorized: bool = False
    bytes_written: int = 0

    tree_lines: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        stage: str,
        cfg: Dict[str, Any],
        repository: str = "",
        output_file: str = "",
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        stage: Name of the stage that aborted the run.
        cfg: The configuration used during the failed run.
        repository: The target input directory.
        output_file: The destination path, if resolved.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        stage=stage,
        repository=repository or str(cfg.get("repository", "")),
        output_file=output_file or str(cfg.get("output_file", "")),
        colorized=bool(cfg.get("colorize", False)),
    )


def create_success_result(
        cfg: Dict[str, Any],
        repository: str,
        output_file: str,
        bytes_written: int,
        dry_run: bool = False,
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        cfg: Final configuration used during execution.
        repository: Normalized input directory.
        output_file: Absolute path of the written document.
        bytes_written: Encoded payload size.
        dry_run: Whether persistence was skipped.
        tree_lines: Optional ASCII preview.
        summary_extra: Tree statistics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    return PipelineResult(
        ok=True,
        error="",
        stage="",
        repository=repository,
        output_file=output_file,
        dry_run=dry_run,
        colorized=bool(cfg.get("colorize", False)),
        bytes_written=bytes_written,
        tree_lines=tree_lines or [],
        summary=summary_extra or {},
    )
