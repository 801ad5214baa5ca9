from __future__ import annotations

"""
Domain Constants.

Shared defaults for traversal filtering, depth coloring, and CLI sentinels.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# CLI SENTINELS
# -----------------------------------------------------------------------------

# Placeholder used by the CLI when a required path flag is not provided
UNSET_PATH = "Unknown"

# -----------------------------------------------------------------------------
# TRAVERSAL FILTERING
# -----------------------------------------------------------------------------

# Matched against root-relative paths ('/' separated, directories end with '/')
DEFAULT_EXCLUDED_PREFIXES: Tuple[str, ...] = (
    ".git",
    "build/",
    "bin/",
    "gradle/",
    "libs/",
    ".gradle/",
    "buildSrc/",
    ".ci/",
)

# -----------------------------------------------------------------------------
# DEPTH COLORING
# -----------------------------------------------------------------------------

DEFAULT_COLOR_STEP = 4
MAX_LIGHTNESS = 100
MIN_LIGHTNESS = 0
COLOR_TEMPLATE = "hsl(0, 0%, {lightness}%)"
