from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed argparse
namespace into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from repotreemap.domain.constants import DEFAULT_COLOR_STEP, UNSET_PATH

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the repotreemap CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="repotreemap",
        description="Scan a directory tree and write it as a JSON document for treemap visualizations.",
    )

    # --- Path Management ---
    p.add_argument(
        "--repository",
        dest="repository",
        default=UNSET_PATH,
        help="full path of the repository",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=UNSET_PATH,
        help="full path of the output file",
    )

    # --- Traversal Filters ---
    p.add_argument(
        "--exclude",
        dest="exclude_prefixes",
        default=None,
        help="Comma-separated root-relative path prefixes to skip, in addition to the defaults.",
    )
    p.add_argument(
        "--no-exclude",
        action="store_true",
        help="Disable the built-in exclusion prefixes (.git, build/, bin/, ...).",
    )

    # --- Visualization ---
    p.add_argument(
        "--no-color",
        action="store_true",
        help="Skip the depth coloring pass.",
    )
    p.add_argument(
        "--color-step",
        dest="color_step",
        type=int,
        default=None,
        help=f"Lightness decrease per tree level (default: {DEFAULT_COLOR_STEP}).",
    )

    # --- Output Format ---
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print the JSON document with this indentation.",
    )
    p.add_argument(
        "--print-tree",
        action="store_true",
        help="Log an ASCII preview of the scanned tree.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and encode the tree without writing the output file.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the execution result as JSON.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["repository"] = args.repository
    overrides["output_file"] = args.output_file

    if args.exclude_prefixes:
        overrides["extra_exclude_prefixes"] = _split_csv(args.exclude_prefixes)
    if args.no_exclude:
        overrides["use_default_excludes"] = False

    if args.no_color:
        overrides["colorize"] = False
    if args.color_step is not None:
        overrides["color_step"] = args.color_step

    if args.indent is not None:
        overrides["indent"] = args.indent
    if args.print_tree:
        overrides["print_tree"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
