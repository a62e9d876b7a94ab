from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory so no test touches the real home.
   Logging is reset around every test.
3. Shared fixtures: a small notes tree on disk and indexes over it.
"""

import os
import sys
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from notefolders.core.services.directory_index import DirectoryIndex  # noqa: E402
from notefolders.infra.logging import shutdown_logging  # noqa: E402
from notefolders.infra.storage import MemorySidecarStorage  # noqa: E402


# -----------------------------------------------------------------------------
# Environment Isolation
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_user_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Redirect config.json and log files into a temporary directory.

    Yields:
        Path: The fake user data directory.
    """
    user_dir = tmp_path / "userdata"
    user_dir.mkdir()
    with patch("notefolders.domain.config.get_user_data_dir", return_value=str(user_dir)), \
            patch("notefolders.infra.logging.core.get_user_data_dir", return_value=str(user_dir)):
        yield user_dir


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """
    Start and end every test with our root handlers detached.

    The console handler binds sys.stderr at configuration time, which is
    pytest's per-test capture stream.
    """
    shutdown_logging()
    yield
    shutdown_logging()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def notes_root(tmp_path: Path) -> Path:
    """
    Create a small notes folder.

    Layout:
        notes/
        ├── alpha.md
        ├── beta.md
        ├── image.png        (not indexed: extension)
        ├── .draft.md        (not indexed: hidden)
        └── projects/
            └── gamma.md

    Returns:
        Path: The 'notes' directory.
    """
    root = tmp_path / "notes"
    (root / "projects").mkdir(parents=True)
    (root / "alpha.md").write_text("# Alpha\n", encoding="utf-8")
    (root / "beta.md").write_text("# Beta\n", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG")
    (root / ".draft.md").write_text("draft", encoding="utf-8")
    (root / "projects" / "gamma.md").write_text("# Gamma\n", encoding="utf-8")
    return root


@pytest.fixture
def outside_file(tmp_path: Path) -> Path:
    """A markdown file that lives next to, not inside, the notes folder."""
    other = tmp_path / "elsewhere"
    other.mkdir()
    f = other / "stray.md"
    f.write_text("stray", encoding="utf-8")
    return f


@pytest.fixture
def memory_storage() -> MemorySidecarStorage:
    """Empty in-memory sidecar."""
    return MemorySidecarStorage()


@pytest.fixture
def memory_index(notes_root: Path, memory_storage: MemorySidecarStorage) -> DirectoryIndex:
    """Index over the notes tree whose overlay persists in memory."""
    return DirectoryIndex(str(notes_root), storage=memory_storage)


@pytest.fixture
def disk_index(notes_root: Path) -> DirectoryIndex:
    """Index over the notes tree whose overlay persists to the real sidecar."""
    return DirectoryIndex(str(notes_root))
