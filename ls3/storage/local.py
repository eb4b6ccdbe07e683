"""Local filesystem backend."""

from __future__ import annotations

import uuid
from typing import Any

import fsspec
from fsspec import AbstractFileSystem

from ls3.exceptions import (
    DirectoryDoesNotExistError,
    ExpectedDirectoryError,
    ExpectedFileError,
    FileDoesNotExistError,
    PathAlreadyExistsError,
    StorageIOError,
)
from ls3.logging_config import get_logger
from ls3.storage.base import FileSystem
from ls3.storage.entry import Entry, classify_info, order
from ls3.storage.paths import SEP, base_name, clean_path, join_path

logger = get_logger(__name__)

ROOT_DIR = SEP


class LocalFS(FileSystem):
    """FileSystem over a hierarchical fsspec filesystem.

    The provider is injectable so tests can hand in a ``MemoryFileSystem``;
    by default the real disk is used, mounted at ``/``. ``work_dir`` is always
    a clean absolute POSIX path.
    """

    def __init__(self, fs: AbstractFileSystem | None = None, base_dir: str = ROOT_DIR) -> None:
        self.fs = fs if fs is not None else fsspec.filesystem("file")
        self.work_dir = clean_path(base_dir)

    def resolve(self, target: str) -> str:
        """Join ``target`` onto the working directory and clean the result."""
        return join_path(self.work_dir, target)

    def _info(self, path: str) -> dict[str, Any] | None:
        try:
            return self.fs.info(path)
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageIOError(f"Could not stat {path}: {exc}", {"path": path}) from exc

    @staticmethod
    def _is_dir_info(info: dict[str, Any]) -> bool:
        return info.get("type") == "directory"

    # --- Contract ---

    def list_contents(self) -> list[Entry]:
        try:
            infos = self.fs.ls(self.work_dir, detail=True)
        except OSError as exc:
            raise StorageIOError(
                f"Could not read directory {self.work_dir}: {exc}",
                {"path": self.work_dir},
            ) from exc

        entries = [classify_info(self.work_dir, info) for info in infos]
        entries = [entry for entry in entries if entry.name not in ("", ".", "..")]
        return order(entries)

    def change_dir(self, target: str) -> None:
        path = self.resolve(target)
        info = self._info(path)
        if info is None:
            raise DirectoryDoesNotExistError(f"Directory does not exist: {path}", {"path": path})
        if not self._is_dir_info(info):
            raise ExpectedDirectoryError(f"Expected path to be a directory: {path}", {"path": path})

        self.work_dir = path
        logger.debug(f"Local working directory changed to {path}")

    def get_file(self, name: str) -> bytes:
        path = self.resolve(name)
        info = self._info(path)
        if info is None:
            raise FileDoesNotExistError(f"File does not exist: {path}", {"path": path})
        if self._is_dir_info(info):
            raise ExpectedFileError(f"Expected path to be a file: {path}", {"path": path})

        try:
            return self.fs.cat_file(path)
        except OSError as exc:
            raise StorageIOError(f"Could not read {path}: {exc}", {"path": path}) from exc

    def write_file(self, name: str, content: bytes) -> None:
        path = self.resolve(name)
        info = self._info(path)
        if info is not None and self._is_dir_info(info):
            raise ExpectedFileError(f"Expected path to be a file: {path}", {"path": path})

        parent = join_path(path, "..")
        parent_info = self._info(parent)
        if parent_info is None:
            raise DirectoryDoesNotExistError(f"Directory does not exist: {parent}", {"path": parent})
        if not self._is_dir_info(parent_info):
            raise ExpectedDirectoryError(f"Expected path to be a directory: {parent}", {"path": parent})

        # Content lands in a sibling first and is moved over the target, so
        # readers never see a partial file.
        staging = join_path(parent, f".{base_name(path)}.{uuid.uuid4().hex}.part")
        try:
            with self.fs.open(staging, "wb", autocommit=True) as fp:
                fp.write(content)
            self.fs.mv(staging, path)
        except OSError as exc:
            self._discard(staging)
            raise StorageIOError(f"Could not write {path}: {exc}", {"path": path}) from exc
        logger.debug(f"Wrote {len(content)} bytes to {path}")

    def _discard(self, staging: str) -> None:
        try:
            if self.fs.exists(staging):
                self.fs.rm_file(staging)
        except OSError as exc:
            logger.warning(f"Could not remove staging file {staging}: {exc}")

    def delete_file(self, name: str) -> None:
        path = self.resolve(name)
        info = self._info(path)
        if info is None:
            raise FileDoesNotExistError(f"File does not exist: {path}", {"path": path})
        if self._is_dir_info(info):
            raise ExpectedFileError(f"Expected path to be a file: {path}", {"path": path})

        try:
            self.fs.rm_file(path)
        except OSError as exc:
            raise StorageIOError(f"Could not delete {path}: {exc}", {"path": path}) from exc
        logger.debug(f"Deleted {path}")

    def make_dir(self, name: str) -> None:
        path = self.resolve(name)
        if self._info(path) is not None:
            raise PathAlreadyExistsError(f"Path already exists: {path}", {"path": path})

        try:
            self.fs.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(f"Could not create {path}: {exc}", {"path": path}) from exc
        logger.debug(f"Created directory {path}")

    # --- Existence checks ---
    # Metadata failures of any kind read as "does not exist".

    def _lookup(self, name: str) -> dict[str, Any] | None:
        try:
            return self.fs.info(self.resolve(name))
        except Exception:
            return None

    def path_exists(self, name: str) -> bool:
        return self._lookup(name) is not None

    def is_file(self, name: str) -> bool:
        info = self._lookup(name)
        return info is not None and not self._is_dir_info(info)

    def is_dir(self, name: str) -> bool:
        info = self._lookup(name)
        return info is not None and self._is_dir_info(info)

    def is_at_root(self) -> bool:
        return self.work_dir == ROOT_DIR


__all__ = ["LocalFS", "ROOT_DIR"]
