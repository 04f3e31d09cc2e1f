from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from steamfriends.config import storage


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv(storage.DATA_DIR_ENV_VAR, str(custom))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == custom.resolve()
    assert config.database_filename == "steam.db"


def test_default_data_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(storage.DATA_DIR_ENV_VAR, raising=False)
    monkeypatch.setattr(storage.os, "name", "posix")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / "xdg" / storage.APP_DIR_NAME).resolve()


def test_database_config_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert storage.get_database_config().uri == "sqlite:///override.db"


def test_database_config_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv(storage.DATA_DIR_ENV_VAR, str(tmp_path / "data-dir"))

    uri = storage.get_database_config().uri

    expected_path = (tmp_path / "data-dir" / storage.DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_database_path_without_ensure_does_not_create(tmp_path: Path) -> None:
    config = storage.StorageConfig(data_dir=tmp_path / "later")

    path = config.database_path(ensure=False)

    assert path == (tmp_path / "later" / "steam.db").resolve()
    assert not path.parent.exists()
