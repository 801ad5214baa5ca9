from __future__ import annotations

"""
Configuration Validation Service.

Ensures the configuration dictionary conforms to the expected schema before
the pipeline runs. Handles type coercion, default value injection, and
resolution of the effective exclusion prefix list.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from repotreemap.core.analysis.filters import default_exclude_prefixes, normalize_prefixes
from repotreemap.domain.config import get_default_config

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (e.g., from the CLI) into strictly typed
    parameters and fills missing keys with domain defaults. The effective
    'exclude_prefixes' list is always recomputed from 'use_default_excludes'
    and 'extra_exclude_prefixes'.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("repository", "output_file"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in ("use_default_excludes", "colorize", "print_tree"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["extra_exclude_prefixes"] = _as_list_str(
        merged.get("extra_exclude_prefixes"), "extra_exclude_prefixes", warnings, strict
    )

    merged["color_step"] = _as_int(
        merged.get("color_step"), defaults["color_step"], "color_step", warnings, strict, minimum=1
    )
    merged["indent"] = _as_optional_int(merged.get("indent"), "indent", warnings, strict)

    base = default_exclude_prefixes() if merged["use_default_excludes"] else []
    merged["exclude_prefixes"] = normalize_prefixes(base + merged["extra_exclude_prefixes"])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return []

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using empty list.")
    return []


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        warnings: List[str],
        strict: bool,
        minimum: int = 0,
) -> int:
    """Validate integer inputs against a lower bound."""
    if value is None:
        return fallback

    if isinstance(value, str) and not strict:
        try:
            value = int(value.strip())
        except ValueError:
            pass

    if isinstance(value, int) and not isinstance(value, bool) and value >= minimum:
        return value

    msg = f"Invalid field '{field}': expected int >= {minimum}, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback


def _as_optional_int(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[int]:
    """Like _as_int, but None stays None (compact JSON output)."""
    if value is None:
        return None
    sentinel = -1
    result = _as_int(value, sentinel, field, warnings, strict, minimum=0)
    return None if result == sentinel else result
