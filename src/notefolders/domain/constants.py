from __future__ import annotations

"""
Domain Constants.

Application-wide names and defaults shared by the overlay, the directory
index and the configuration layer.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"

# Sidecar file placed at the root of every directory that carries overlays
VIRTUAL_DIR_FILENAME = ".ztr-virtual-dir"

# Type tag carried by derived views so renderers can tell them from real dirs
VIRTUAL_DIR_TYPE = "virtualdir"

DEFAULT_EXTENSIONS: List[str] = [".md", ".markdown", ".txt"]

DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"^(__pycache__|\.git|\.idea|\.vscode|node_modules)$",
    r"^\.",
]
