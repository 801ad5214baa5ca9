from __future__ import annotations

"""
Configuration Domain Management.

Defines the default runtime configuration consumed by the pipeline. The
configuration lives only for a single run: it is assembled from these
defaults and command-line overrides, never persisted.
"""

from typing import Any, Dict

from repotreemap.domain.constants import (
    DEFAULT_COLOR_STEP,
    DEFAULT_EXCLUDED_PREFIXES,
    UNSET_PATH,
)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).
    This dictionary drives the behavior of the Pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "repository": UNSET_PATH,
        "output_file": UNSET_PATH,

        # Filtering (effective list is resolved by the validator)
        "use_default_excludes": True,
        "extra_exclude_prefixes": [],
        "exclude_prefixes": list(DEFAULT_EXCLUDED_PREFIXES),

        # Visualization
        "colorize": True,
        "color_step": DEFAULT_COLOR_STEP,

        # Output Format
        "indent": None,
        "print_tree": False,
    }
