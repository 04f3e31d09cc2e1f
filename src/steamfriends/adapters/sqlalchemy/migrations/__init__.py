"""Packaged Alembic revisions for the friend store schema."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from steamfriends.config.storage import get_database_config

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


def alembic_config(
    *, connection: Connection | None = None, database_uri: str | None = None
) -> Config:
    """Build an in-memory Alembic config; no ``alembic.ini`` is shipped."""

    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    if connection is not None:
        config.attributes["connection"] = connection
    elif database_uri is not None:
        # main options go through configparser interpolation
        config.set_main_option("sqlalchemy.url", database_uri.replace("%", "%%"))
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Bring the schema to the newest revision; a no-op when already current."""

    if engine is None:
        uri = database_uri or get_database_config().uri
        command.upgrade(alembic_config(database_uri=uri), "head")
        return
    with engine.begin() as connection:
        command.upgrade(alembic_config(connection=connection), "head")
