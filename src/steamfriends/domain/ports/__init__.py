"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CredentialProvider, FriendFetcher
from .persistence import NameHistoryRepository, PlayerSummaryRepository
from .unit_of_work import FriendRepositories, FriendUnitOfWork

__all__ = [
    "CredentialProvider",
    "FriendFetcher",
    "FriendRepositories",
    "FriendUnitOfWork",
    "NameHistoryRepository",
    "PlayerSummaryRepository",
]
