"""Thin synchronous client for the object store (S3 or compatible)."""

from __future__ import annotations

from contextlib import closing
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ls3.exceptions import KeyNotFoundError, TransportError
from ls3.storage.context import RequestContext

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass(frozen=True)
class ObjectInfo:
    key: str
    size: int = 0


@dataclass
class ListResult:
    """Response of a delimited listing: synthetic directories and objects."""

    common_prefixes: list[str] = field(default_factory=list)
    objects: list[ObjectInfo] = field(default_factory=list)


class StoreClient(Protocol):
    def list_objects(
        self,
        bucket: str,
        prefix: str,
        delimiter: str = "/",
        ctx: RequestContext | None = None,
        max_keys: int | None = None,
    ) -> ListResult:
        ...

    def get_object(self, bucket: str, key: str, ctx: RequestContext | None = None) -> bytes:
        ...

    def put_object(self, bucket: str, key: str, data: bytes, ctx: RequestContext | None = None) -> None:
        ...

    def delete_object(self, bucket: str, key: str, ctx: RequestContext | None = None) -> None:
        ...


class S3StoreClient:
    """StoreClient backed by a boto3 S3 client.

    Retries and socket timeouts are botocore's business and are configured
    on the client; this class only translates errors and honours the
    request context.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        connect_timeout: float = 10.0,
        read_timeout: float = 60.0,
        max_attempts: int = 3,
    ) -> None:
        if client is None:
            session = boto3.session.Session(region_name=region) if region else boto3.session.Session()
            config = Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={"max_attempts": max_attempts, "mode": "standard"},
            )
            client = session.client("s3", endpoint_url=endpoint_url, config=config)
        self.client = client

    def _call(self, operation: str, ctx: RequestContext | None, details: dict[str, str], fn, **params: Any) -> Any:
        ctx = ctx or RequestContext.background()
        ctx.raise_if_done(operation)
        try:
            result = fn(**params)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_KEY_CODES:
                raise KeyNotFoundError(f"{operation}: key not found", details) from exc
            raise TransportError(f"{operation} failed: {exc}", {**details, "code": code}) from exc
        except BotoCoreError as exc:
            raise TransportError(f"{operation} failed: {exc}", details) from exc
        # A result that arrives after cancellation is discarded.
        ctx.raise_if_done(operation)
        return result

    def list_objects(
        self,
        bucket: str,
        prefix: str,
        delimiter: str = "/",
        ctx: RequestContext | None = None,
        max_keys: int | None = None,
    ) -> ListResult:
        details = {"bucket": bucket, "prefix": prefix}
        params: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix, "Delimiter": delimiter}

        def _pages(**kwargs: Any) -> Iterable[dict[str, Any]]:
            # A bounded listing is a single request; otherwise follow every page.
            if max_keys is not None:
                return [self.client.list_objects_v2(MaxKeys=max_keys, **kwargs)]
            return self.client.get_paginator("list_objects_v2").paginate(**kwargs)

        def _collect(**kwargs: Any) -> ListResult:
            result = ListResult()
            for page in _pages(**kwargs):
                if ctx is not None:
                    ctx.raise_if_done("ListObjectsV2")
                result.common_prefixes.extend(
                    item["Prefix"] for item in page.get("CommonPrefixes", []) or []
                )
                result.objects.extend(
                    ObjectInfo(key=item["Key"], size=int(item.get("Size", 0)))
                    for item in page.get("Contents", []) or []
                )
            return result

        return self._call("ListObjectsV2", ctx, details, _collect, **params)

    def get_object(self, bucket: str, key: str, ctx: RequestContext | None = None) -> bytes:
        """Fetch the whole object body.

        The body is streamed inside the request, so read timeouts and
        truncated responses surface as TransportError like any other failure.
        """
        details = {"bucket": bucket, "key": key}

        def _read(**params: Any) -> bytes:
            response = self.client.get_object(**params)
            with closing(response["Body"]) as body:
                return body.read()

        return self._call("GetObject", ctx, details, _read, Bucket=bucket, Key=key)

    def put_object(self, bucket: str, key: str, data: bytes, ctx: RequestContext | None = None) -> None:
        details = {"bucket": bucket, "key": key}
        self._call("PutObject", ctx, details, self.client.put_object, Bucket=bucket, Key=key, Body=data)

    def delete_object(self, bucket: str, key: str, ctx: RequestContext | None = None) -> None:
        details = {"bucket": bucket, "key": key}
        self._call("DeleteObject", ctx, details, self.client.delete_object, Bucket=bucket, Key=key)


__all__ = ["ListResult", "ObjectInfo", "S3StoreClient", "StoreClient"]
