"""SQLAlchemy adapter package for the friend store."""

from __future__ import annotations

from .mappings import metadata, name_history_table, player_summaries_table
from .repositories import SqlAlchemyNameHistoryRepository, SqlAlchemyPlayerSummaryRepository
from .unit_of_work import SqlAlchemyUnitOfWork, StartupError, build_session_factory, startup

__all__ = [
    "SqlAlchemyNameHistoryRepository",
    "SqlAlchemyPlayerSummaryRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "build_session_factory",
    "metadata",
    "name_history_table",
    "player_summaries_table",
    "startup",
]
