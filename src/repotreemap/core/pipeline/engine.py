from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates a complete run:
1. Validates configuration and resolves paths.
2. Builds the node tree from the repository.
3. Applies the depth coloring pass.
4. Encodes the tree as JSON.
5. Persists the document (skipped in dry-run mode).

Every stage failure is terminal; the result names the stage that aborted.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from repotreemap.core.analysis.colorizer import color_tree
from repotreemap.core.analysis.stats import compute_stats
from repotreemap.core.analysis.tree_builder import build_tree
from repotreemap.core.analysis.tree_renderer import render_tree
from repotreemap.core.pipeline.validator import validate_config
from repotreemap.core.serialization.codec import encode_tree, write_tree
from repotreemap.domain.constants import UNSET_PATH
from repotreemap.domain.errors import ConfigurationError, TreeMapError
from repotreemap.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from repotreemap.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> PipelineResult:
    """
    Execute the full tree mapping pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, build and encode the tree without writing it.

    Returns:
        PipelineResult: Object containing status, statistics, and paths.
    """
    logger.info("Pipeline execution started.")

    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    repository = ""
    output_file = ""

    try:
        repository, output_file = _resolve_paths(cfg, dry_run)

        # 1) Traversal and linking
        tree = build_tree(repository, cfg["exclude_prefixes"])

        # 2) Visualization annotations
        if cfg["colorize"]:
            color_tree(tree, step=cfg["color_step"])

        # 3) Encoding
        payload = encode_tree(tree, indent=cfg["indent"])

        tree_lines: List[str] = []
        if cfg["print_tree"]:
            tree_lines = render_tree(tree)
            logger.info("Tree Preview:\n" + "\n".join(tree_lines))

        # 4) Persistence
        if dry_run:
            logger.info(f"Dry run: {len(payload)} bytes encoded, nothing written.")
        else:
            write_tree(output_file, payload)

    except TreeMapError as e:
        logger.error(f"Pipeline aborted during {e.stage}: {e}")
        return create_error_result(str(e), e.stage, cfg, repository, output_file)

    stats = compute_stats(tree)
    logger.info(
        f"Pipeline finished: {stats.nodes} nodes "
        f"({stats.files} files, {stats.dirs} directories, {stats.total_bytes} bytes)."
    )

    return create_success_result(
        cfg,
        repository=repository,
        output_file=output_file,
        bytes_written=len(payload),
        dry_run=dry_run,
        tree_lines=tree_lines,
        summary_extra=stats.to_dict(),
    )


def _resolve_paths(cfg: Dict[str, Any], dry_run: bool) -> Tuple[str, str]:
    """Reject unset path sentinels and normalize the configured paths."""
    if cfg["repository"] == UNSET_PATH:
        raise ConfigurationError("Repository path is not set (use --repository).")

    repository = normalize_path(cfg["repository"], os.getcwd())

    if cfg["output_file"] == UNSET_PATH:
        if not dry_run:
            raise ConfigurationError("Output file is not set (use -o).")
        return repository, ""

    return repository, normalize_path(cfg["output_file"], os.getcwd())
