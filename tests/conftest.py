from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session  # noqa: TC002
from sqlalchemy.pool import StaticPool

from steamfriends.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    build_session_factory,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


def _memory_engine() -> Engine:
    return create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def bare_sqlite_engine() -> Iterator[Engine]:
    """In-memory engine without any schema applied."""

    engine = _memory_engine()
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = startup(engine=_memory_engine())
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session = build_session_factory(sqlite_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(sqlite_engine: Engine) -> Callable[[], SqlAlchemyUnitOfWork]:
    session_factory = build_session_factory(sqlite_engine)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return factory
