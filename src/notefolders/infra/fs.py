from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and containment checks used by
the directory index and the virtual directory overlay. Acts as an
abstraction over the 'os' module to ensure uniform behavior across Windows
and Unix-like systems.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "NoteFolders"
UNIX_APP_DIR_NAME = ".notefolders"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/NoteFolders
    - Linux/Mac: ~/.notefolders

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    # Idempotent directory creation
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# CONTAINMENT API
# -----------------------------------------------------------------------------

def is_within(path: str, root: str) -> bool:
    """
    Check whether an absolute path is the root itself or lives below it.

    Comparison is done on normalized paths so that '..' segments cannot
    escape the root.

    Args:
        path: Absolute candidate path.
        root: Absolute root directory.

    Returns:
        bool: True if 'path' is contained in 'root'.
    """
    norm_root = os.path.normcase(os.path.normpath(root))
    norm_path = os.path.normcase(os.path.normpath(path))
    if norm_path == norm_root:
        return True
    return norm_path.startswith(norm_root.rstrip(os.sep) + os.sep)
