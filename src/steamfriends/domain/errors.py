"""Failures that abort a sync run."""

from __future__ import annotations


class FriendSyncError(RuntimeError):
    """Base class for errors that end a reconciliation pass."""


class UpstreamFetchError(FriendSyncError):
    """Raised when the friend list or profile details cannot be fetched."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StorageError(FriendSyncError):
    """Raised when the database cannot be opened, migrated, or written."""
