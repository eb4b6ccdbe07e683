"""Builds backends from settings for the browser front end."""

from __future__ import annotations

import fsspec
from fsspec.implementations.dirfs import DirFileSystem

from ls3.logging_config import get_logger, setup_logging
from ls3.settings import Settings, get_settings
from ls3.storage.client import S3StoreClient, StoreClient
from ls3.storage.local import ROOT_DIR, LocalFS
from ls3.storage.s3 import S3FS

logger = get_logger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    logging_settings = (settings or get_settings()).logging
    log_file = logging_settings.file.expanduser() if logging_settings.file else None
    setup_logging(
        level=logging_settings.level,
        json_format=logging_settings.json_format,
        log_file=log_file,
    )


def create_local_fs(settings: Settings | None = None) -> LocalFS:
    """Open the local disk, mounted at the configured root.

    Under a root other than ``/`` the disk is wrapped so that ``/`` inside the
    backend is that directory and ``..`` cannot climb out of it.
    """
    local = (settings or get_settings()).local
    mount_root = local.mount_root
    fs = None
    if mount_root != ROOT_DIR:
        fs = DirFileSystem(path=mount_root, fs=fsspec.filesystem("file"))
    start_dir = local.start_dir
    logger.info(f"Opening local filesystem at {start_dir} (mounted at {mount_root})")
    return LocalFS(fs, base_dir=start_dir)


def create_store_client(settings: Settings | None = None) -> S3StoreClient:
    storage = (settings or get_settings()).storage
    return S3StoreClient(
        region=storage.region,
        endpoint_url=storage.endpoint_url,
        connect_timeout=storage.connect_timeout,
        read_timeout=storage.read_timeout,
        max_attempts=storage.max_attempts,
    )


def create_s3_fs(settings: Settings | None = None, client: StoreClient | None = None) -> S3FS:
    """Open the configured bucket at the configured starting prefix.

    The bucket name is resolved here, from the settings or the environment,
    so the backend itself never reads process-wide state.
    """
    settings = settings or get_settings()
    storage = settings.storage
    bucket = storage.bucket_name
    if client is None:
        client = create_store_client(settings)
    logger.info(f"Opening bucket {bucket} at prefix {storage.prefix!r}")
    return S3FS(client, bucket, storage.prefix, timeout=storage.request_timeout)


__all__ = ["configure_logging", "create_local_fs", "create_s3_fs", "create_store_client"]
