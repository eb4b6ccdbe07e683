from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from ls3.exceptions import ConfigurationError
from ls3.storage.paths import SEP, clean_path

DEFAULT_CONFIG_PATH = Path("~/.ls3.yaml")


class StorageSettings(BaseModel):
    bucket: str | None = None
    bucket_env: str = "BUCKET_NAME"
    # Starting "directory" inside the bucket
    prefix: str = ""
    region: str | None = None
    endpoint_url: str | None = None
    connect_timeout: float = Field(10.0, gt=0.0)
    read_timeout: float = Field(60.0, gt=0.0)
    max_attempts: int = Field(3, ge=1, le=20)
    # Per-operation deadline for backend calls; None disables it
    request_timeout: float | None = Field(None, gt=0.0)

    @field_validator("prefix", mode="before")
    @classmethod
    def _normalize_prefix(cls, value: Any) -> str:  # noqa: D401
        if value is None:
            return ""
        return str(value).strip("/")

    @property
    def bucket_name(self) -> str:
        if self.bucket:
            return self.bucket
        value = os.getenv(self.bucket_env)
        if not value:
            raise ConfigurationError(
                f"No bucket configured: set storage.bucket or the '{self.bucket_env}' environment variable",
                {"setting": "storage.bucket", "env": self.bucket_env},
            )
        return value


class LocalSettings(BaseModel):
    # Host directory the backend is mounted at; "/" exposes the whole disk
    root: str = "/"
    # Starting working directory. Under the default root, relative paths are
    # taken from the process cwd; under any other root it is a path inside the mount.
    base_dir: str | None = None

    @property
    def mount_root(self) -> str:
        return Path(self.root).expanduser().resolve().as_posix()

    @property
    def start_dir(self) -> str:
        if self.mount_root != SEP:
            return clean_path(self.base_dir or SEP)
        base = Path(self.base_dir).expanduser() if self.base_dir else Path.cwd()
        return base.resolve().as_posix()


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:  # noqa: D401
        if value is None:
            return "INFO"
        return str(value).upper()


class Settings(BaseModel):
    storage: StorageSettings = Field(default_factory=StorageSettings)
    local: LocalSettings = Field(default_factory=LocalSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None, env_file: Path | None = None) -> "Settings":
        """Load settings from a YAML configuration file.

        Args:
            path: Optional path to the configuration file. If not provided, uses
                the LS3_CONFIG environment variable or defaults to ~/.ls3.yaml.
            env_file: Optional .env file; defaults to .env in the working directory.

        Returns:
            Settings instance. A missing default file yields the defaults.

        Raises:
            ConfigurationError: If an explicitly requested file does not exist
                or the configuration is invalid.
        """
        load_dotenv(env_file or Path.cwd() / ".env", override=False)

        explicit = path or (Path(os.environ["LS3_CONFIG"]) if os.getenv("LS3_CONFIG") else None)
        config_path = (explicit or DEFAULT_CONFIG_PATH).expanduser()
        if not config_path.exists():
            if explicit is not None:
                raise ConfigurationError(
                    f"Configuration file not found: {config_path}",
                    {"path": str(config_path)},
                )
            return cls()

        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}", {"path": str(config_path)}) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(
                f"Invalid configuration: expected a mapping in {config_path}",
                {"path": str(config_path)},
            )
        try:
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "StorageSettings",
    "LocalSettings",
    "LoggingSettings",
    "get_settings",
]
