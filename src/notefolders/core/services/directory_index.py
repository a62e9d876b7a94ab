from __future__ import annotations

"""
Directory Index Service.

In-memory representation of a real notes folder: the files found under its
root and the virtual directories overlaid on top of it. This is the parent
directory the VirtualDirectoryManager resolves its stored paths against.
"""

import logging
import os
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from notefolders.core.filters import (
    compile_patterns,
    default_exclude_patterns,
    has_extension,
    matches_any,
    normalize_extensions,
)
from notefolders.core.services.virtual_dirs import VirtualDirectoryManager
from notefolders.domain.errors import DirectoryNotFoundError
from notefolders.domain.virtual_dir_models import FileObject, VirtualDirectoryView
from notefolders.infra.fs import is_within, normalize_path
from notefolders.infra.storage import SidecarStorage

logger = logging.getLogger(__name__)


class DirectoryIndex:
    """
    Scans a directory tree and owns its virtual directory overlay.

    Implements the contract the overlay consumes: get_path(), is_scope()
    and find_file().
    """

    def __init__(
            self,
            path: str,
            extensions: Optional[List[str]] = None,
            exclude_patterns: Optional[List[str]] = None,
            storage: Optional[SidecarStorage] = None,
    ) -> None:
        """
        Scan the directory and load its virtual directories.

        Args:
            path: Root directory of the notes folder.
            extensions: Whitelisted file extensions. None uses defaults.
            exclude_patterns: Regexes for names to skip. None uses defaults.
            storage: Sidecar backend override, mainly for tests.

        Raises:
            DirectoryNotFoundError: If 'path' is not an existing directory.
        """
        self._root = normalize_path(path, fallback=os.getcwd())
        if not os.path.isdir(self._root):
            raise DirectoryNotFoundError(f"Not a directory: {self._root}")

        self._extensions = normalize_extensions(extensions)
        patterns = exclude_patterns if exclude_patterns is not None else default_exclude_patterns()
        self._exclude_rx = compile_patterns(patterns)

        self._files: List[FileObject] = []
        self._by_path: Dict[str, FileObject] = {}
        self._by_hash: Dict[int, FileObject] = {}
        self._scan()

        self._virtual_dirs = VirtualDirectoryManager(self, storage=storage)

    # --------------------------------------------------------------------------
    # Overlay contract
    # --------------------------------------------------------------------------

    def get_path(self) -> str:
        return self._root

    def is_scope(self, ref: Any) -> bool:
        """
        Check whether a reference points at or below the root.

        Args:
            ref: Absolute or root-relative path, or an object with 'path'.

        Returns:
            bool: True if the reference belongs to this directory.
        """
        p = ref if isinstance(ref, str) else getattr(ref, "path", None)
        if not isinstance(p, str) or not p:
            return False
        if not os.path.isabs(p):
            p = os.path.join(self._root, p)
        return is_within(p, self._root)

    def find_file(self, criteria: Any) -> Optional[FileObject]:
        """
        Look up a live file by absolute path or by identifier.

        Args:
            criteria: Mapping with a 'path' or 'hash' key.

        Returns:
            Optional[FileObject]: The matching file, or None.
        """
        if not isinstance(criteria, Mapping):
            return None

        if "path" in criteria and isinstance(criteria["path"], str):
            return self._by_path.get(os.path.normpath(criteria["path"]))
        if "hash" in criteria:
            return self._by_hash.get(criteria["hash"])
        return None

    # --------------------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------------------

    @property
    def files(self) -> List[FileObject]:
        return list(self._files)

    @property
    def virtual_dirs(self) -> VirtualDirectoryManager:
        return self._virtual_dirs

    def find_dir(self, query: Any) -> Optional[VirtualDirectoryView]:
        """Find a virtual directory by its identifier."""
        return self._virtual_dirs.find(query)

    def refresh(self) -> None:
        """Rescan the disk and re-resolve the virtual directories."""
        self._scan()
        self._virtual_dirs.rebuild()

    # --------------------------------------------------------------------------
    # Scanning
    # --------------------------------------------------------------------------

    def _scan(self) -> None:
        files: List[FileObject] = []

        for root, dirs, names in os.walk(self._root):
            dirs[:] = [d for d in dirs if not matches_any(d, self._exclude_rx)]
            dirs.sort()
            names.sort()

            for file_name in names:
                if matches_any(file_name, self._exclude_rx):
                    continue
                if not has_extension(file_name, self._extensions):
                    continue
                files.append(FileObject.from_path(os.path.join(root, file_name), self._root))

        self._files = files
        self._by_path = {f.path: f for f in files}
        self._by_hash = {f.hash: f for f in files}
        logger.debug(f"Indexed {len(files)} file(s) under {self._root}")
