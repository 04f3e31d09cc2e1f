"""Alembic environment for the friend store schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from steamfriends.adapters.sqlalchemy.mappings import metadata
from steamfriends.config.storage import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config


def _run_on(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=metadata, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    shared = config.attributes.get("connection")
    if shared is not None:
        _run_on(shared)
        return

    url = config.get_main_option("sqlalchemy.url") or get_database_config().uri
    engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _run_on(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    # revisions inspect the live schema before creating tables
    raise RuntimeError("Offline (--sql) migrations are not supported")
run_migrations_online()
