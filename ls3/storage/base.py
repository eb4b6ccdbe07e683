"""Shared interface for navigating local directories and S3 buckets."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ls3.exceptions import UnsupportedOperationError
from ls3.storage.entry import Entry


class FileSystem(ABC):
    """Navigable view over one storage backend.

    Each instance tracks a single working location, changed only by a
    successful ``change_dir``. Instances hold no lock: callers must not use
    one instance from several threads at once.
    """

    @abstractmethod
    def list_contents(self) -> list[Entry]:
        """List the working location, directories first then files."""

    @abstractmethod
    def change_dir(self, target: str) -> None:
        """Move to ``target``, resolved against the working location."""

    @abstractmethod
    def get_file(self, name: str) -> bytes:
        """Return the full contents of the file ``name``."""

    @abstractmethod
    def write_file(self, name: str, content: bytes) -> None:
        """Create or overwrite the file ``name`` with ``content``."""

    @abstractmethod
    def path_exists(self, name: str) -> bool:
        """Return True if anything exists at ``name``."""

    @abstractmethod
    def is_file(self, name: str) -> bool:
        """Return True if ``name`` exists and is a file."""

    @abstractmethod
    def is_dir(self, name: str) -> bool:
        """Return True if ``name`` exists and is a directory."""

    @abstractmethod
    def is_at_root(self) -> bool:
        """Return True if the working location is the backend root."""

    def delete_file(self, name: str) -> None:
        """Delete the file ``name``."""
        raise self._unsupported("delete_file")

    def make_dir(self, name: str) -> None:
        """Create the directory ``name`` (and any missing parents)."""
        raise self._unsupported("make_dir")

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        backend = type(self).__name__
        return UnsupportedOperationError(
            f"{backend} does not support {operation}",
            {"backend": backend, "operation": operation},
        )


__all__ = ["FileSystem"]
