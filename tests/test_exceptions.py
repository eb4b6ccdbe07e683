"""Tests for custom exception hierarchy."""

import pytest

from ls3.exceptions import (
    ConfigurationError,
    DirectoryDoesNotExistError,
    ExpectedDirectoryError,
    ExpectedFileError,
    FileDoesNotExistError,
    KeyNotFoundError,
    Ls3Error,
    NotFoundError,
    OperationCancelledError,
    OperationTimeoutError,
    PathAlreadyExistsError,
    StorageIOError,
    TransportError,
    UnsupportedOperationError,
    WrongKindError,
)


def test_ls3_error_base():
    """Test base Ls3Error."""
    error = Ls3Error("Test error", {"key": "value"})
    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.details == {"key": "value"}


def test_details_default_to_empty():
    assert ConfigurationError("Config missing").details == {}


@pytest.mark.parametrize(
    ("error_cls", "parent"),
    [
        (FileDoesNotExistError, NotFoundError),
        (DirectoryDoesNotExistError, NotFoundError),
        (KeyNotFoundError, NotFoundError),
        (ExpectedFileError, WrongKindError),
        (ExpectedDirectoryError, WrongKindError),
        (OperationCancelledError, TransportError),
        (OperationTimeoutError, TransportError),
    ],
)
def test_exception_inheritance(error_cls, parent):
    assert issubclass(error_cls, parent)
    assert issubclass(error_cls, Ls3Error)


def test_taxonomy_roots_are_distinct():
    roots = [
        ConfigurationError,
        NotFoundError,
        WrongKindError,
        PathAlreadyExistsError,
        StorageIOError,
        TransportError,
        UnsupportedOperationError,
    ]
    for root in roots:
        assert root.__bases__ == (Ls3Error,)


def test_not_found_is_not_builtin_file_not_found():
    assert not issubclass(FileDoesNotExistError, FileNotFoundError)
