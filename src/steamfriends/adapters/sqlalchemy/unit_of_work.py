"""SQLAlchemy engine startup and unit of work for the friend store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from alembic.util import CommandError
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from steamfriends.adapters.sqlalchemy.migrations import upgrade_head
from steamfriends.adapters.sqlalchemy.repositories import (
    SqlAlchemyNameHistoryRepository,
    SqlAlchemyPlayerSummaryRepository,
)
from steamfriends.config.storage import get_database_config
from steamfriends.domain.errors import StorageError
from steamfriends.domain.ports.unit_of_work import FriendRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a unit of work is used outside its ``with`` block."""


def startup(*, engine: Engine | None = None, database_uri: str | None = None) -> Engine:
    """Create (or adopt) an engine and bring the schema up to date.

    The engine is returned to the caller; nothing is kept at module level.
    """

    try:
        resolved_engine = engine or create_engine(
            database_uri or get_database_config().uri, future=True
        )
        upgrade_head(engine=resolved_engine)
    except (SQLAlchemyError, CommandError) as exc:
        raise StorageError(f"Could not initialise the database: {exc}") from exc
    log.debug("Database ready at %s", resolved_engine.url.render_as_string(hide_password=True))
    return resolved_engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


class SqlAlchemyUnitOfWork:
    """One session and one transaction per ``with`` block.

    Leaving the block without ``commit`` discards every write made inside it.
    Database errors raised inside the block surface as ``StorageError``.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self._active: tuple[Session, FriendRepositories] | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._active is not None:
            raise StartupError("Unit of work is already open")
        session = self.session_factory()
        self._active = (
            session,
            FriendRepositories(
                player_summaries=SqlAlchemyPlayerSummaryRepository(session),
                name_history=SqlAlchemyNameHistoryRepository(session),
            ),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session, _ = self._require_active()
        self._active = None
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
        if isinstance(exc_value, SQLAlchemyError):
            raise StorageError(f"Database error: {exc_value}") from exc_value
        return False

    def _require_active(self) -> tuple[Session, FriendRepositories]:
        if self._active is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._active

    @property
    def session(self) -> Session:
        return self._require_active()[0]

    @property
    def repositories(self) -> FriendRepositories:
        return self._require_active()[1]

    def commit(self) -> None:
        session = self.session
        try:
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"Could not commit friend state: {exc}") from exc

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from typing import cast

    from steamfriends.domain.ports.unit_of_work import FriendUnitOfWork

    _uow_check: FriendUnitOfWork = SqlAlchemyUnitOfWork(cast("sessionmaker[Session]", object()))
