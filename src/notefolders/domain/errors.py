from __future__ import annotations

"""
Domain Exceptions.
"""


class SidecarFormatError(ValueError):
    """The sidecar holds valid JSON that is not a list of virtual directory records."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid virtual directory file '{path}': {reason}")
        self.path = path
        self.reason = reason


class DirectoryNotFoundError(FileNotFoundError):
    """The root handed to a DirectoryIndex does not exist or is not a directory."""
