"""Lexical path handling shared by the backends.

Nothing here touches a filesystem: paths are cleaned as strings, the way
``path.Clean`` works on POSIX paths. Separators are always ``/``.
"""

from __future__ import annotations

SEP = "/"


def split_segments(path: str) -> list[str]:
    """Split a path into its non-empty segments (``.`` included)."""
    return [segment for segment in path.split(SEP) if segment]


def clean_segments(segments: list[str]) -> list[str]:
    """Collapse ``.`` and resolve ``..`` within a segment list.

    A ``..`` that would climb above the first segment is dropped, which keeps
    rooted paths at their root.
    """
    stack: list[str] = []
    for segment in segments:
        if segment == ".":
            continue
        if segment == "..":
            if stack:
                stack.pop()
            continue
        stack.append(segment)
    return stack


def clean_path(path: str) -> str:
    """Return the shortest absolute path equivalent to ``path``.

    >>> clean_path("//dir3/./subdir/../")
    '/dir3'
    >>> clean_path("/..")
    '/'
    """
    return SEP + SEP.join(clean_segments(split_segments(path)))


def join_path(base: str, target: str) -> str:
    """Resolve ``target`` against the absolute directory ``base``.

    Targets starting with ``/`` are anchored at the root instead of ``base``.
    """
    if target.startswith(SEP):
        return clean_path(target)
    return clean_path(f"{base}{SEP}{target}")


def join_prefix(prefix: str, target: str) -> str:
    """Resolve ``target`` against an S3 key prefix.

    The root prefix is the empty string and results never carry leading or
    trailing separators. Climbing above the root stays at the root.
    """
    if target.startswith(SEP):
        segments = split_segments(target)
    else:
        segments = split_segments(prefix) + split_segments(target)
    return SEP.join(clean_segments(segments))


def base_name(path: str) -> str:
    """Last non-empty segment of ``path`` (empty for the root)."""
    segments = split_segments(path)
    return segments[-1] if segments else ""


__all__ = [
    "SEP",
    "base_name",
    "clean_path",
    "clean_segments",
    "join_path",
    "join_prefix",
    "split_segments",
]
