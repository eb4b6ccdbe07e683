from __future__ import annotations

from pathlib import Path

import pytest

from ls3.exceptions import ConfigurationError
from ls3.settings import LocalSettings, Settings, StorageSettings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    monkeypatch.delenv("LS3_CONFIG", raising=False)
    # Recorded first so teardown removes whatever load_dotenv sets.
    monkeypatch.setenv("BUCKET_NAME", "placeholder")
    monkeypatch.delenv("BUCKET_NAME")
    return home, work


def test_defaults_when_no_config_file():
    settings = Settings.load()
    assert settings.storage.prefix == ""
    assert settings.logging.level == "INFO"
    assert settings.local.base_dir is None


def test_load_yaml_file(tmp_path):
    config = tmp_path / "ls3.yaml"
    config.write_text(
        "storage:\n"
        "  bucket: my-bucket\n"
        "  prefix: /photos/2024/\n"
        "  region: eu-west-1\n"
        "local:\n"
        "  base_dir: /srv/data\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )

    settings = Settings.load(config)

    assert settings.storage.bucket_name == "my-bucket"
    assert settings.storage.prefix == "photos/2024"
    assert settings.storage.region == "eu-west-1"
    assert settings.local.base_dir == "/srv/data"
    assert settings.logging.level == "DEBUG"


def test_default_config_in_home(isolated_env):
    home, _ = isolated_env
    (home / ".ls3.yaml").write_text("storage:\n  bucket: from-home\n", encoding="utf-8")

    assert Settings.load().storage.bucket_name == "from-home"


def test_config_path_from_environment(monkeypatch, tmp_path):
    config = tmp_path / "custom.yaml"
    config.write_text("storage:\n  bucket: from-env-path\n", encoding="utf-8")
    monkeypatch.setenv("LS3_CONFIG", str(config))

    assert Settings.load().storage.bucket_name == "from-env-path"


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        Settings.load(tmp_path / "absent.yaml")


def test_invalid_config_raises(tmp_path):
    config = tmp_path / "bad.yaml"
    config.write_text("storage:\n  max_attempts: 0\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Settings.load(config)


def test_non_mapping_config_raises(tmp_path):
    config = tmp_path / "list.yaml"
    config.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Settings.load(config)


def test_bucket_from_environment(monkeypatch):
    monkeypatch.setenv("BUCKET_NAME", "env-bucket")
    assert StorageSettings().bucket_name == "env-bucket"


def test_bucket_from_dotenv(isolated_env):
    _, work = isolated_env
    (work / ".env").write_text("BUCKET_NAME=dotenv-bucket\n", encoding="utf-8")

    assert Settings.load().storage.bucket_name == "dotenv-bucket"


def test_missing_bucket_raises():
    with pytest.raises(ConfigurationError) as excinfo:
        StorageSettings().bucket_name
    assert excinfo.value.details["env"] == "BUCKET_NAME"


def test_local_start_dir_defaults_to_cwd(isolated_env):
    _, work = isolated_env
    assert Settings().local.start_dir == Path(work).resolve().as_posix()


def test_local_root_defaults_to_whole_disk():
    assert LocalSettings().mount_root == "/"


def test_local_start_dir_is_inside_custom_root(tmp_path):
    local = LocalSettings(root=str(tmp_path), base_dir="docs//./drafts/")

    assert local.mount_root == tmp_path.resolve().as_posix()
    assert local.start_dir == "/docs/drafts"
    assert LocalSettings(root=str(tmp_path)).start_dir == "/"
