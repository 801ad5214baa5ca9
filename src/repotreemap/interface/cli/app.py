from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of defaults with
command-line overrides, pipeline execution, and result rendering.

Exit codes:
    0    Success.
    1    Traversal, serialization, or output failure.
    2    Invalid arguments, unset paths, or missing repository.
    130  Interrupted by the user.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from repotreemap.core.pipeline.engine import run_pipeline
from repotreemap.domain.config import get_default_config
from repotreemap.domain.constants import UNSET_PATH
from repotreemap.domain.errors import ConfigurationError
from repotreemap.domain.pipeline_models import PipelineResult
from repotreemap.infra.fs import normalize_path
from repotreemap.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from repotreemap.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Argument errors are reported by argparse itself, which exits with
    status 2. Every other failure is logged here and mapped to an exit code.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration...")

    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(get_default_config(), overrides)

    # Pre-flight input verification
    repository = raw_conf.get("repository", UNSET_PATH)
    if repository != UNSET_PATH and not os.path.exists(normalize_path(repository, os.getcwd())):
        msg = f"Repository path does not exist: {repository}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_USAGE

    try:
        result = run_pipeline(raw_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Unexpected failure: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    if result.stage == ConfigurationError.stage:
        return EXIT_USAGE
    return EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged; None values never replace a default.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "repository", "output_file",
        "use_default_excludes", "extra_exclude_prefixes",
        "colorize", "color_step", "indent", "print_tree",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult) -> None:
    """
    Format and print the execution result.

    Args:
        result: The pipeline result to render.
    """
    if not result.ok:
        print(f"ERROR ({result.stage}): {result.error}", file=sys.stderr)
        return

    summary = result.summary
    if result.dry_run:
        print(f"Dry run complete: {result.bytes_written} bytes encoded for {result.repository}")
    else:
        print(f"Tree written to {result.output_file} ({result.bytes_written} bytes)")

    print(
        f"Entries: {summary.get('nodes', 0)} "
        f"({summary.get('files', 0)} files, {summary.get('dirs', 0)} directories), "
        f"{summary.get('total_bytes', 0)} bytes, max depth {summary.get('max_depth', 0)}"
    )

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
