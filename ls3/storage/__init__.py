"""Storage abstraction (local filesystem or S3 bucket behind one interface)."""

from __future__ import annotations

from ls3.storage.base import FileSystem
from ls3.storage.client import ListResult, ObjectInfo, S3StoreClient, StoreClient
from ls3.storage.context import RequestContext
from ls3.storage.entry import Entry, classify, classify_info, order
from ls3.storage.local import LocalFS
from ls3.storage.s3 import S3FS

__all__ = [
    "Entry",
    "FileSystem",
    "ListResult",
    "LocalFS",
    "ObjectInfo",
    "RequestContext",
    "S3FS",
    "S3StoreClient",
    "StoreClient",
    "classify",
    "classify_info",
    "order",
]
