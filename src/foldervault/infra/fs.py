from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, directory creation and best-effort
removal helpers. Acts as an abstraction over the 'os' module so the engine
services share one behavior for these low-level operations.
"""

import logging
import os
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "FolderVault"
UNIX_APP_DIR_NAME = ".foldervault"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/FolderVault
    - Linux/Mac: ~/.foldervault

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.debug(f"Could not create data directory '{path}': {e}")

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%), user home shortcuts
    (~/) and trailing separators. Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.normpath(os.path.abspath(p))


def to_archive_name(rel_path: str) -> str:
    """Convert an OS-relative path into a '/'-separated archive member name."""
    parts = [part for part in rel_path.replace(os.sep, "/").split("/") if part and part != "."]
    return "/".join(parts)


# -----------------------------------------------------------------------------
# FILESYSTEM MUTATION API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def remove_file_quietly(path: str) -> bool:
    """
    Remove a file if it exists, logging instead of raising on failure.

    Args:
        path: Target file path.

    Returns:
        bool: True if no file remains at the path afterwards.
    """
    if not os.path.lexists(path):
        return True
    try:
        os.remove(path)
        logger.debug(f"Removed existing file: {path}")
        return True
    except OSError as e:
        logger.warning(f"Could not remove '{path}': {e}")
        return False
