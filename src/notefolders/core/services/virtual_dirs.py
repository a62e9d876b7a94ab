from __future__ import annotations

"""
Virtual Directory Overlay Service.

Lets the user group references to existing files under a synthetic folder
name without moving anything on disk. The grouping is persisted as a JSON
sidecar at the root of the owning directory.

Lifecycle:
1. The manager always holds a reference to its real (parent) directory.
2. Records are read from the sidecar once, on construction or load().
3. add() and remove() rewrite the sidecar immediately.
4. After every read and write the derived views are rebuilt from the
   records plus live lookups in the parent directory.
"""

import copy
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Iterable, Iterator, List, Optional

from notefolders.domain.constants import VIRTUAL_DIR_FILENAME
from notefolders.domain.virtual_dir_models import (
    VirtualDirectoryRecord,
    VirtualDirectoryView,
    records_from_json,
    records_to_json,
)
from notefolders.infra.storage import FileSidecarStorage, SidecarStorage
from notefolders.utils.hashing import string_hash

if TYPE_CHECKING:
    from notefolders.core.services.directory_index import DirectoryIndex

logger = logging.getLogger(__name__)


# ==============================================================================
# VIEW RECOMPUTATION STRATEGIES
# ==============================================================================

class ViewBuilder(ABC):
    """
    Strategy that turns the persisted records into derived views.
    """

    @abstractmethod
    def build(
            self,
            records: List[VirtualDirectoryRecord],
            manager: VirtualDirectoryManager,
    ) -> List[VirtualDirectoryView]:
        """
        Produce one view per record, in record order.

        Args:
            records: Current persisted records.
            manager: Owning manager, giving access to path conversion and
                the parent directory.

        Returns:
            List[VirtualDirectoryView]: The complete set of views.
        """
        pass


class FullRebuildViewBuilder(ViewBuilder):
    """
    Invalidate-and-recompute: every view is rebuilt from scratch.

    Stored paths that no longer resolve to a live file are skipped.
    """

    def build(
            self,
            records: List[VirtualDirectoryRecord],
            manager: VirtualDirectoryManager,
    ) -> List[VirtualDirectoryView]:
        views: List[VirtualDirectoryView] = []
        for record in records:
            children = []
            for rel in record.files:
                found = manager.directory.find_file({"path": manager.to_absolute(rel)})
                if found is not None:
                    children.append(found)
                else:
                    logger.debug(f"Virtual dir '{record.name}': unresolved entry '{rel}' skipped")

            views.append(VirtualDirectoryView(
                name=record.name,
                hash=string_hash(record.name),
                children=children,
            ))
        return views


# ==============================================================================
# MANAGER
# ==============================================================================

class VirtualDirectoryManager:
    """
    Owns the virtual directories of one real directory.

    Keeps the persisted records and the derived views in sync and writes
    every change to the sidecar immediately. Not thread-safe; no locking
    is done.
    """

    def __init__(
            self,
            directory: DirectoryIndex,
            storage: Optional[SidecarStorage] = None,
            builder: Optional[ViewBuilder] = None,
    ) -> None:
        """
        Bind to a directory and load its sidecar if present.

        Args:
            directory: Parent directory exposing get_path(), is_scope()
                and find_file().
            storage: Sidecar backend. Defaults to the file
                '<directory>/.ztr-virtual-dir'.
            builder: View recomputation strategy.

        Raises:
            json.JSONDecodeError: If the sidecar is not valid JSON.
            SidecarFormatError: If the sidecar has the wrong shape.
        """
        self._directory = directory
        self._root = directory.get_path()
        self._file = os.path.join(self._root, VIRTUAL_DIR_FILENAME)
        self._storage = storage if storage is not None else FileSidecarStorage(self._file)
        self._builder = builder or FullRebuildViewBuilder()

        self._records: List[VirtualDirectoryRecord] = []
        self._views: List[VirtualDirectoryView] = []

        self.load()

    # --------------------------------------------------------------------------
    # Accessors
    # --------------------------------------------------------------------------

    @property
    def directory(self) -> DirectoryIndex:
        return self._directory

    @property
    def sidecar_path(self) -> str:
        return self._file

    @property
    def records(self) -> List[VirtualDirectoryRecord]:
        """Deep copy of the persisted records."""
        return copy.deepcopy(self._records)

    @property
    def views(self) -> List[VirtualDirectoryView]:
        return list(self._views)

    @property
    def names(self) -> List[str]:
        return [r.name for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find_record(name) is not None

    def __iter__(self) -> Iterator[VirtualDirectoryView]:
        return iter(list(self._views))

    # --------------------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Read the records from the sidecar and rebuild the views.

        Returns:
            bool: True if a sidecar was found and loaded, False if absent.
        """
        if not self._storage.exists():
            logger.debug(f"No virtual directories at {self._storage.path}")
            self._records = []
            self._views = []
            return False

        text = self._storage.read_text()
        try:
            records = records_from_json(text, self._storage.path)
        except ValueError as e:
            logger.error(f"Cannot read virtual directories from {self._storage.path}: {e}")
            raise

        self._records = records
        self.rebuild()
        logger.debug(f"Loaded {len(records)} virtual director(y/ies) from {self._storage.path}")
        return True

    def add(self, name: Any, file_refs: Iterable[Any] = ()) -> bool:
        """
        Create a virtual directory if needed and add files to it.

        References outside the parent directory are skipped without error.
        Paths already stored in the record are not added twice.

        Args:
            name: Virtual directory name (case-insensitive match).
            file_refs: Paths (absolute or root-relative) or objects with
                a 'path' attribute.

        Returns:
            bool: False if 'name' is not a string, True otherwise.
        """
        if not isinstance(name, str):
            logger.warning(f"Rejected virtual directory name of type {type(name).__name__}")
            return False

        record = self._find_record(name)
        if record is None:
            record = VirtualDirectoryRecord(name=name)
            self._records.append(record)
            logger.info(f"Virtual directory created: '{name}'")

        for ref in file_refs:
            if not self._directory.is_scope(ref):
                logger.debug(f"'{_ref_path(ref)}' is outside {self._root}; not added to '{record.name}'")
                continue

            rel = self.to_relative(self._normalize(_ref_path(ref)))
            if rel not in record.files:
                record.files.append(rel)

        self._persist()
        return True

    def remove(self, name: Any, refs: Iterable[Any] = ()) -> None:
        """
        Remove files from a virtual directory, or the whole directory.

        Args:
            name: Virtual directory name (case-insensitive match).
            refs: Files to remove, given as file identifiers (int), paths,
                or objects with a 'hash' attribute. Empty removes the
                virtual directory itself.
        """
        if not isinstance(name, str):
            return

        record = self._find_record(name)
        if record is None:
            return

        ids = {self._ref_id(r) for r in refs}
        if not ids:
            self._records.remove(record)
            logger.info(f"Virtual directory removed: '{record.name}'")
        else:
            before = len(record.files)
            record.files = [
                f for f in record.files if self._file_id(f) not in ids
            ]
            logger.debug(f"Removed {before - len(record.files)} file(s) from '{record.name}'")

        self._persist()

    def find(self, query: Any) -> Optional[VirtualDirectoryView]:
        """
        Return the view whose identifier matches the query.

        Args:
            query: Mapping with a 'hash' key or object with a 'hash'
                attribute.

        Returns:
            Optional[VirtualDirectoryView]: First matching view, or None.
        """
        if isinstance(query, Mapping):
            if "hash" not in query:
                return None
            wanted = query["hash"]
        elif hasattr(query, "hash"):
            wanted = query.hash
        else:
            return None

        for view in self._views:
            if view.hash == wanted:
                return view
        return None

    def rebuild(self) -> None:
        """Recompute the derived views from the current records."""
        self._views = self._builder.build(self._records, self)

    # --------------------------------------------------------------------------
    # Path conversion
    # --------------------------------------------------------------------------

    def is_absolute(self, path: str) -> bool:
        """True if the path starts with the directory root."""
        return path.startswith(self._root)

    def to_relative(self, path: str) -> str:
        """Strip the directory root from a path, if present."""
        if self.is_absolute(path):
            return path[len(self._root):].lstrip("/\\")
        return path

    def to_absolute(self, path: str) -> str:
        """Join a root-relative path onto the directory root."""
        if not self.is_absolute(path):
            return os.path.join(self._root, path)
        return path

    # --------------------------------------------------------------------------
    # Internal helpers
    # --------------------------------------------------------------------------

    def _find_record(self, name: str) -> Optional[VirtualDirectoryRecord]:
        for record in self._records:
            if record.matches(name):
                return record
        return None

    def _persist(self) -> None:
        """Write the records (or delete the sidecar when empty), then rebuild."""
        if not self._records:
            self._storage.delete()
        else:
            self._storage.write_text(records_to_json(self._records))
        self.rebuild()

    def _normalize(self, path: str) -> str:
        return os.path.normpath(self.to_absolute(path))

    def _file_id(self, stored: str) -> int:
        return string_hash(self._normalize(stored))

    def _ref_id(self, ref: Any) -> int:
        if isinstance(ref, int) and not isinstance(ref, bool):
            return ref
        if isinstance(ref, str):
            return self._file_id(ref)
        if hasattr(ref, "hash"):
            return ref.hash
        return self._file_id(_ref_path(ref))


def _ref_path(ref: Any) -> str:
    """Extract a path from a string or an object exposing 'path'."""
    if isinstance(ref, str):
        return ref
    return str(getattr(ref, "path", ref))

