from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, UTF-8 safe rendering of filesystem names, and
a crash-safe file writer used to persist the generated document.
"""

import logging
import os
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def utf8_safe(text: str) -> str:
    """
    Return a name or path that can always be encoded as UTF-8.

    On POSIX, os.listdir() maps filename bytes that are not valid UTF-8 to
    lone surrogates. Those bytes are replaced with U+FFFD here; valid names
    come back unchanged.
    """
    return os.fsencode(text).decode("utf-8", "replace")

# -----------------------------------------------------------------------------
# WRITE API
# -----------------------------------------------------------------------------

def atomic_write_bytes(path: str, payload: bytes, mode: int = 0o644) -> int:
    """
    Write a payload so the destination is either fully replaced or untouched.

    Data goes to a temporary file in the destination directory, is flushed
    to disk, and then renamed over the target. The parent directory must
    already exist.

    Args:
        path: Destination file path.
        payload: Bytes to persist.
        mode: Permission bits applied to the final file.

    Returns:
        int: Number of bytes written.

    Raises:
        OSError: If any step fails. The temporary file is removed first.
    """
    target = os.path.abspath(path)
    parent = os.path.dirname(target)

    fd, tmp_path = tempfile.mkstemp(prefix=".repotreemap-", suffix=".tmp", dir=parent)
    try:
        with os.fdopen(fd, "wb") as out:
            out.write(payload)
            out.flush()
            os.fsync(out.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise

    logger.debug(f"Wrote {len(payload)} bytes to {target}")
    return len(payload)
