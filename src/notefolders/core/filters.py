from __future__ import annotations

"""
File Filtering Helpers.

Regex-based exclusion and extension whitelisting used when the directory
index scans a notes folder.
"""

import os
import re
from typing import List, Optional

from notefolders.domain.constants import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_EXTENSIONS


def default_extensions() -> List[str]:
    """
    Get the default list of indexed file extensions.

    Returns:
        List[str]: Markdown and plain-text extensions.
    """
    return list(DEFAULT_EXTENSIONS)


def default_exclude_patterns() -> List[str]:
    """
    Get the default exclusion patterns.

    Skips VCS/editor folders and every hidden entry, which also keeps the
    overlay sidecar out of the index.

    Returns:
        List[str]: Regex strings matched against single path components.
    """
    return list(DEFAULT_EXCLUDE_PATTERNS)


def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Compile regex strings, discarding malformed ones.

    Args:
        patterns: Raw regex strings.

    Returns:
        List[re.Pattern]: Compiled patterns.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """True if at least one pattern matches the name."""
    return any(rx.search(name) for rx in compiled_patterns)


def normalize_extensions(extensions: Optional[List[str]]) -> List[str]:
    """
    Lower-case extensions and ensure a leading dot.

    Args:
        extensions: Raw list such as ['md', '.TXT']. None means defaults.

    Returns:
        List[str]: Normalized extensions.
    """
    if extensions is None:
        return default_extensions()

    out: List[str] = []
    for e in extensions:
        e = e.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            e = "." + e
        out.append(e)
    return out


def has_extension(file_name: str, extensions: List[str]) -> bool:
    """True if the file's extension (case-insensitive) is whitelisted."""
    return os.path.splitext(file_name)[1].lower() in extensions
