"""File and directory entries, and the order they are listed in."""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Entry:
    """One file or directory as returned by ``FileSystem.list_contents``.

    ``path`` is the location the entry was listed under: an absolute path for
    the local backend, a key prefix for S3. Directories always have size 0.
    """

    path: str
    name: str
    is_dir: bool
    size: int = 0

    @property
    def display_name(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name

    @property
    def full_path(self) -> str:
        if not self.path:
            return self.name
        return posixpath.join(self.path, self.name)


def classify(path: str, name: str, is_dir: bool, size: int | None = None) -> Entry:
    """Build an Entry from backend metadata; directory sizes are dropped."""
    if is_dir:
        return Entry(path=path, name=name, is_dir=True, size=0)
    return Entry(path=path, name=name, is_dir=False, size=int(size or 0))


def classify_info(path: str, info: Mapping[str, Any]) -> Entry:
    """Build an Entry from an fsspec ``info``/``ls(detail=True)`` mapping."""
    name = posixpath.basename(str(info["name"]).rstrip("/"))
    return classify(path, name, info.get("type") == "directory", info.get("size"))


def _sort_key(entry: Entry) -> tuple[bool, str]:
    return (not entry.is_dir, entry.name)


def order(entries: list[Entry]) -> list[Entry]:
    """Sort entries in place: directories first, then files, each by name.

    Names compare case-sensitively. Duplicates are kept; the sort is stable.
    The same list is returned for convenience.
    """
    entries.sort(key=_sort_key)
    return entries


__all__ = ["Entry", "classify", "classify_info", "order"]
