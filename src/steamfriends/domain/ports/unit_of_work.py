"""Transaction boundary for a friend sync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from steamfriends.domain.ports.persistence import (
        NameHistoryRepository,
        PlayerSummaryRepository,
    )


@dataclass(slots=True)
class FriendRepositories:
    """Both stores written by one reconciliation pass."""

    player_summaries: PlayerSummaryRepository
    name_history: NameHistoryRepository


@runtime_checkable
class FriendUnitOfWork(Protocol):
    """Scope in which reads and writes share one transaction.

    Nothing written through ``repositories`` is visible to later units of work
    until ``commit`` succeeds; leaving the ``with`` block on an exception rolls
    back.
    """

    @property
    def repositories(self) -> FriendRepositories: ...

    def __enter__(self) -> FriendUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
