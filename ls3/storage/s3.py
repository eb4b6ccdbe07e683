"""S3 backend.

S3 has no directories, only keys. A "directory" here is a key prefix ending
at a ``/`` delimiter: it is derived from the keys beneath it by a delimited
listing and disappears as soon as the last of them is deleted. The working
location is such a prefix, stored without leading or trailing separators;
the empty string is the bucket root.
"""

from __future__ import annotations

from ls3.exceptions import (
    DirectoryDoesNotExistError,
    ExpectedDirectoryError,
    ExpectedFileError,
    FileDoesNotExistError,
    KeyNotFoundError,
)
from ls3.logging_config import get_logger
from ls3.storage.base import FileSystem
from ls3.storage.client import StoreClient
from ls3.storage.context import RequestContext
from ls3.storage.entry import Entry, classify, order
from ls3.storage.paths import SEP, base_name, join_prefix

logger = get_logger(__name__)

ROOT_PREFIX = ""


class S3FS(FileSystem):
    """FileSystem over one S3 bucket.

    Every method that talks to the store takes an optional ``ctx``; when it
    is omitted, a fresh context with the instance's ``timeout`` is used for
    all the requests of that call.
    """

    def __init__(
        self,
        client: StoreClient,
        bucket: str,
        work_path: str = ROOT_PREFIX,
        *,
        timeout: float | None = None,
    ) -> None:
        self.client = client
        self.bucket = bucket
        self.work_path = join_prefix(ROOT_PREFIX, work_path)
        self.timeout = timeout

    def resolve(self, target: str) -> str:
        """Resolve ``target`` against the working prefix.

        ``..`` at the root stays at the root, and a path that cleans to
        ``/`` or ``.`` is the root. Any non-empty result is a real prefix.
        """
        return join_prefix(self.work_path, target)

    def _ctx(self, ctx: RequestContext | None) -> RequestContext:
        return ctx if ctx is not None else RequestContext(timeout=self.timeout)

    @staticmethod
    def _dir_prefix(path: str) -> str:
        return f"{path}{SEP}" if path else ROOT_PREFIX

    def _prefix_exists(self, path: str, ctx: RequestContext) -> bool:
        if path == ROOT_PREFIX:
            return True
        result = self.client.list_objects(self.bucket, self._dir_prefix(path), ctx=ctx, max_keys=1)
        return bool(result.common_prefixes or result.objects)

    def _key_exists(self, key: str, ctx: RequestContext) -> bool:
        if key == ROOT_PREFIX:
            return False
        # The exact key sorts before anything else sharing its prefix.
        result = self.client.list_objects(self.bucket, key, ctx=ctx, max_keys=1)
        return any(obj.key == key for obj in result.objects)

    # --- Contract ---

    def list_contents(self, ctx: RequestContext | None = None) -> list[Entry]:
        prefix = self._dir_prefix(self.work_path)
        result = self.client.list_objects(self.bucket, prefix, delimiter=SEP, ctx=self._ctx(ctx))

        entries: list[Entry] = []
        for common_prefix in result.common_prefixes:
            name = base_name(common_prefix)
            if name:
                entries.append(classify(self.work_path, name, True))
        for obj in result.objects:
            name = base_name(obj.key[len(prefix):] if obj.key.startswith(prefix) else obj.key)
            # Directory marker objects end with the delimiter and have no name of their own.
            if name and not obj.key.endswith(SEP):
                entries.append(classify(self.work_path, name, False, obj.size))
        return order(entries)

    def change_dir(self, target: str, ctx: RequestContext | None = None) -> None:
        path = self.resolve(target)
        ctx = self._ctx(ctx)
        if not self._prefix_exists(path, ctx):
            if self._key_exists(path, ctx):
                raise ExpectedDirectoryError(
                    f"Expected path to be a directory: {path}",
                    {"bucket": self.bucket, "path": path},
                )
            raise DirectoryDoesNotExistError(
                f"Directory does not exist: {path}",
                {"bucket": self.bucket, "path": path},
            )

        self.work_path = path
        logger.debug(f"S3 working prefix changed to {path!r} in bucket {self.bucket}")

    def get_file(self, name: str, ctx: RequestContext | None = None) -> bytes:
        key = self.resolve(name)
        ctx = self._ctx(ctx)
        details = {"bucket": self.bucket, "key": key}
        if key == ROOT_PREFIX:
            raise ExpectedFileError("Expected path to be a file: bucket root", details)

        try:
            return self.client.get_object(self.bucket, key, ctx=ctx)
        except KeyNotFoundError as exc:
            if self._prefix_exists(key, ctx):
                raise ExpectedFileError(f"Expected path to be a file: {key}", details) from exc
            raise FileDoesNotExistError(f"File does not exist: {key}", details) from exc

    def write_file(self, name: str, content: bytes, ctx: RequestContext | None = None) -> None:
        key = self.resolve(name)
        ctx = self._ctx(ctx)
        if self._prefix_exists(key, ctx):
            raise ExpectedFileError(
                f"Expected path to be a file: {key or 'bucket root'}",
                {"bucket": self.bucket, "key": key},
            )

        self.client.put_object(self.bucket, key, bytes(content), ctx=ctx)
        logger.debug(f"Put {len(content)} bytes to s3://{self.bucket}/{key}")

    def delete_file(self, name: str, ctx: RequestContext | None = None) -> None:
        key = self.resolve(name)
        ctx = self._ctx(ctx)
        details = {"bucket": self.bucket, "key": key}
        # S3 deletes of missing keys succeed, so existence is checked first.
        if not self._key_exists(key, ctx):
            if self._prefix_exists(key, ctx):
                raise ExpectedFileError(f"Expected path to be a file: {key or 'bucket root'}", details)
            raise FileDoesNotExistError(f"File does not exist: {key}", details)

        self.client.delete_object(self.bucket, key, ctx=ctx)
        logger.debug(f"Deleted s3://{self.bucket}/{key}")

    # --- Existence checks ---
    # Store errors of any kind read as "does not exist".

    def path_exists(self, name: str, ctx: RequestContext | None = None) -> bool:
        ctx = self._ctx(ctx)
        return self.is_dir(name, ctx) or self.is_file(name, ctx)

    def is_file(self, name: str, ctx: RequestContext | None = None) -> bool:
        try:
            return self._key_exists(self.resolve(name), self._ctx(ctx))
        except Exception:
            return False

    def is_dir(self, name: str, ctx: RequestContext | None = None) -> bool:
        try:
            return self._prefix_exists(self.resolve(name), self._ctx(ctx))
        except Exception:
            return False

    def is_at_root(self) -> bool:
        return self.work_path == ROOT_PREFIX


__all__ = ["ROOT_PREFIX", "S3FS"]
