from __future__ import annotations

"""
Virtual Directory Data Models.

Defines the persisted overlay record, the derived view handed to renderers,
the file objects produced by the directory index, and the JSON codec for
the sidecar file.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

from notefolders.domain.constants import VIRTUAL_DIR_TYPE
from notefolders.domain.errors import SidecarFormatError
from notefolders.utils.hashing import string_hash

# -----------------------------------------------------------------------------
# FILE OBJECTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileObject:
    """
    A live file known to a DirectoryIndex.

    Attributes:
        path: Absolute filesystem path.
        rel_path: Path relative to the index root.
        name: Base filename.
        ext: Extension including the dot.
        hash: Stable identifier derived from the absolute path.
    """
    path: str
    rel_path: str
    name: str
    ext: str
    hash: int

    @classmethod
    def from_path(cls, path: str, root: str) -> "FileObject":
        name = os.path.basename(path)
        return cls(
            path=path,
            rel_path=os.path.relpath(path, root),
            name=name,
            ext=os.path.splitext(name)[1],
            hash=string_hash(path),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "rel_path": self.rel_path,
            "ext": self.ext,
            "hash": self.hash,
            "type": "file",
        }

# -----------------------------------------------------------------------------
# OVERLAY RECORDS AND VIEWS
# -----------------------------------------------------------------------------

@dataclass
class VirtualDirectoryRecord:
    """
    Persisted form of one virtual directory.

    Attributes:
        name: Display name, unique under case-insensitive comparison.
        files: Root-relative paths in insertion order.
    """
    name: str
    files: List[str] = field(default_factory=list)

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.lower() == name.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "files": list(self.files)}


@dataclass(frozen=True)
class VirtualDirectoryView:
    """
    Derived, query-ready form of a virtual directory.

    Rebuilt from records and live lookups, never edited by hand.

    Attributes:
        name: Name copied from the record.
        hash: Stable identifier computed from the name.
        children: Resolved file objects, in record order.
        type: Fixed tag distinguishing views from real directories.
    """
    name: str
    hash: int
    children: List[FileObject] = field(default_factory=list)
    type: str = VIRTUAL_DIR_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "hash": self.hash,
            "type": self.type,
            "children": [c.to_dict() for c in self.children],
        }

# -----------------------------------------------------------------------------
# SIDECAR CODEC
# -----------------------------------------------------------------------------

def records_to_json(records: List[VirtualDirectoryRecord]) -> str:
    """Serialize the full record list as a compact JSON array."""
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def records_from_json(text: str, path: str = "<sidecar>") -> List[VirtualDirectoryRecord]:
    """
    Parse sidecar content into records.

    Only the basic shape is checked. Malformed JSON raises
    json.JSONDecodeError unchanged.

    Args:
        text: Raw sidecar content.
        path: Source location, used in error messages.

    Returns:
        List[VirtualDirectoryRecord]: Records in file order.

    Raises:
        SidecarFormatError: If the document is not a list of records.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise SidecarFormatError(path, f"expected a JSON array, got {type(data).__name__}")

    records: List[VirtualDirectoryRecord] = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise SidecarFormatError(path, f"entry {idx} is not an object")

        name = item.get("name")
        if not isinstance(name, str):
            raise SidecarFormatError(path, f"entry {idx} has no string 'name'")

        files = item.get("files", [])
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise SidecarFormatError(path, f"entry {idx} 'files' must be a list of strings")

        records.append(VirtualDirectoryRecord(name=name, files=list(files)))

    return records
