"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from steamfriends.adapters.sqlalchemy.mappings import name_history_table, player_summaries_table
from steamfriends.domain.model import NameHistoryEntry, PlayerSummary

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sqlalchemy.orm import Session

    from steamfriends.domain.model import AccountId, NameKey


def _summary_from_row(row: Mapping[str, Any]) -> PlayerSummary:
    return PlayerSummary(
        account_id=row["account_id"],
        display_name=row["persona_name"],
        profile_url=row["profile_url"],
        friend_since=row["friend_since"],
        updated_at=row["updated_at"],
        removed_at=row["removed_at"],
    )


def _summary_to_row(summary: PlayerSummary) -> dict[str, object]:
    return {
        "account_id": summary.account_id,
        "persona_name": summary.display_name,
        "profile_url": summary.profile_url,
        "friend_since": summary.friend_since,
        "updated_at": summary.updated_at,
        "removed_at": summary.removed_at,
    }


class SqlAlchemyPlayerSummaryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def load_all(self) -> dict[AccountId, PlayerSummary]:
        rows = self.session.execute(select(player_summaries_table)).mappings()
        return {row["account_id"]: _summary_from_row(row) for row in rows}

    def get(self, account_id: AccountId) -> PlayerSummary | None:
        stmt = select(player_summaries_table).where(
            player_summaries_table.c.account_id == account_id
        )
        row = self.session.execute(stmt).mappings().one_or_none()
        return _summary_from_row(row) if row is not None else None

    def upsert(self, summaries: Iterable[PlayerSummary]) -> int:
        """Insert new rows and overwrite existing ones, never touching ``friend_since``."""

        rows = [_summary_to_row(summary) for summary in summaries]
        if not rows:
            return 0
        stmt = sqlite_insert(player_summaries_table)
        stmt = stmt.on_conflict_do_update(
            index_elements=[player_summaries_table.c.account_id],
            set_={
                "persona_name": stmt.excluded.persona_name,
                "profile_url": stmt.excluded.profile_url,
                "updated_at": stmt.excluded.updated_at,
                "removed_at": stmt.excluded.removed_at,
            },
        )
        self.session.execute(stmt, rows)
        return len(rows)


class SqlAlchemyNameHistoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def load_keys(self) -> set[NameKey]:
        stmt = select(name_history_table.c.account_id, name_history_table.c.persona_name)
        return {(account_id, name) for account_id, name in self.session.execute(stmt)}

    def for_account(self, account_id: AccountId) -> list[NameHistoryEntry]:
        stmt = (
            select(name_history_table)
            .where(name_history_table.c.account_id == account_id)
            .order_by(name_history_table.c.updated_at, name_history_table.c.persona_name)
        )
        return [
            NameHistoryEntry(
                account_id=row["account_id"],
                display_name=row["persona_name"],
                updated_at=row["updated_at"],
            )
            for row in self.session.execute(stmt).mappings()
        ]

    def add(self, entries: Iterable[NameHistoryEntry]) -> int:
        """Append entries; a pair that is already recorded keeps its original row."""

        rows = [
            {
                "account_id": entry.account_id,
                "persona_name": entry.display_name,
                "updated_at": entry.updated_at,
            }
            for entry in entries
        ]
        if not rows:
            return 0
        stmt = sqlite_insert(name_history_table).on_conflict_do_nothing(
            index_elements=[name_history_table.c.account_id, name_history_table.c.persona_name]
        )
        self.session.execute(stmt, rows)
        return len(rows)


if TYPE_CHECKING:
    from steamfriends.domain.ports.persistence import (
        NameHistoryRepository,
        PlayerSummaryRepository,
    )

    _session_stub = cast("Session", object())
    _summary_repo_check: PlayerSummaryRepository = SqlAlchemyPlayerSummaryRepository(
        _session_stub
    )
    _history_repo_check: NameHistoryRepository = SqlAlchemyNameHistoryRepository(_session_stub)
