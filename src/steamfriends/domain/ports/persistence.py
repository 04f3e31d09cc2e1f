"""Ports for persisting friend state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from steamfriends.domain.model import AccountId, NameHistoryEntry, NameKey, PlayerSummary


@runtime_checkable
class PlayerSummaryRepository(Protocol):
    """Persistence contract for the current-state table."""

    def load_all(self) -> dict[AccountId, PlayerSummary]: ...

    def get(self, account_id: AccountId) -> PlayerSummary | None: ...

    def upsert(self, summaries: Iterable[PlayerSummary]) -> int: ...


@runtime_checkable
class NameHistoryRepository(Protocol):
    """Persistence contract for the append-only name history."""

    def load_keys(self) -> set[NameKey]: ...

    def for_account(self, account_id: AccountId) -> list[NameHistoryEntry]: ...

    def add(self, entries: Iterable[NameHistoryEntry]) -> int: ...
