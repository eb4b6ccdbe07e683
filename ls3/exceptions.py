"""Custom exception hierarchy for ls3."""

from __future__ import annotations


class Ls3Error(Exception):
    """Base exception for all ls3-specific errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(Ls3Error):
    """Raised when configuration is invalid or missing."""
    pass


class NotFoundError(Ls3Error):
    """Base class for missing paths, keys and files."""
    pass


class FileDoesNotExistError(NotFoundError):
    """Raised when a file does not exist."""
    pass


class DirectoryDoesNotExistError(NotFoundError):
    """Raised when a directory (or S3 prefix) does not exist."""
    pass


class KeyNotFoundError(NotFoundError):
    """Raised by a store client when an object key does not exist."""
    pass


class WrongKindError(Ls3Error):
    """Base class for a path that exists but is the wrong kind."""
    pass


class ExpectedFileError(WrongKindError):
    """Raised when a path was expected to be a file but is a directory."""
    pass


class ExpectedDirectoryError(WrongKindError):
    """Raised when a path was expected to be a directory but is a file."""
    pass


class PathAlreadyExistsError(Ls3Error):
    """Raised by create-only operations when the target already exists."""
    pass


class StorageIOError(Ls3Error):
    """Raised when the underlying filesystem fails to read or write."""
    pass


class TransportError(Ls3Error):
    """Raised when the object store cannot be reached or rejects a call."""
    pass


class OperationCancelledError(TransportError):
    """Raised when a request context is cancelled."""
    pass


class OperationTimeoutError(TransportError):
    """Raised when a request context runs past its deadline."""
    pass


class UnsupportedOperationError(Ls3Error):
    """Raised when a backend does not support an operation."""
    pass
