from __future__ import annotations

"""
Sidecar Storage Backends.

Whole-file text storage used to persist the virtual directory overlay.
The overlay manager only talks to the SidecarStorage interface, which lets
tests swap the real file for an in-memory slot.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class SidecarStorage(ABC):
    """
    Interface for a single whole-file text document.

    Attributes:
        path: Location of the document (informational for non-disk backends).
    """

    path: str = ""

    @abstractmethod
    def exists(self) -> bool:
        pass

    @abstractmethod
    def read_text(self) -> str:
        """
        Return the whole document.

        Raises:
            FileNotFoundError: If the document does not exist.
        """
        pass

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Overwrite the whole document."""
        pass

    @abstractmethod
    def delete(self) -> None:
        """Remove the document. A missing document is not an error."""
        pass


class FileSidecarStorage(SidecarStorage):
    """
    UTF-8 file on disk, read and overwritten as a whole.

    No locking and no atomic rename: the sidecar is owned exclusively by one
    overlay manager.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def read_text(self) -> str:
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, text: str) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.debug(f"Sidecar written: {self.path} ({len(text)} chars)")

    def delete(self) -> None:
        try:
            os.remove(self.path)
            logger.debug(f"Sidecar removed: {self.path}")
        except FileNotFoundError:
            pass

    def __repr__(self) -> str:
        return f"FileSidecarStorage({self.path!r})"


class MemorySidecarStorage(SidecarStorage):
    """
    In-memory text slot with the same semantics as FileSidecarStorage.

    Tracks the number of writes and deletes so callers can assert on I/O.
    """

    def __init__(self, initial: Optional[str] = None, path: str = "<memory>") -> None:
        self.path = path
        self._text = initial
        self.write_count = 0
        self.delete_count = 0

    def exists(self) -> bool:
        return self._text is not None

    def read_text(self) -> str:
        if self._text is None:
            raise FileNotFoundError(self.path)
        return self._text

    def write_text(self, text: str) -> None:
        self._text = text
        self.write_count += 1

    def delete(self) -> None:
        self._text = None
        self.delete_count += 1
