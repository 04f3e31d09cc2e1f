"""Location of the friend database on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import read_env

APP_DIR_NAME: Final[str] = "steamfriends"
DEFAULT_DB_FILENAME: Final[str] = "steam.db"
DATA_DIR_ENV_VAR: Final[str] = "STEAMFRIENDS_DATA_DIR"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


def _platform_data_home() -> Path:
    if os.name == "nt":
        return Path(read_env("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    return Path(read_env("XDG_DATA_HOME") or Path.home() / ".local" / "share")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Directory holding the SQLite file; created on first use."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @classmethod
    def from_env(cls) -> StorageConfig:
        override = read_env(DATA_DIR_ENV_VAR)
        data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
        return cls(data_dir=data_dir)

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self, *, ensure: bool = True) -> Path:
        data_dir = self.resolve_data_dir()
        if ensure:
            data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    return StorageConfig.from_env()


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Use ``DATABASE_URI`` when set, otherwise the SQLite file in the data directory."""

    override = read_env(DATABASE_URI_ENV_VAR)
    if override:
        return DatabaseConfig(uri=override)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
