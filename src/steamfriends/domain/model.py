"""Domain records for fetched friends and their persisted state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

type AccountId = int
type NameKey = tuple[AccountId, str]


@dataclass(frozen=True, slots=True)
class FriendRecord:
    """One entry of a friend list: who, and since when."""

    account_id: AccountId
    friend_since: datetime


@dataclass(frozen=True, slots=True)
class ProfileDetails:
    """Current public profile details of one account."""

    account_id: AccountId
    display_name: str
    profile_url: str


@dataclass(frozen=True, slots=True)
class ObservedFriend:
    """A friend-list entry paired with the profile details fetched for it."""

    friend: FriendRecord
    profile: ProfileDetails

    def __post_init__(self) -> None:
        if self.friend.account_id != self.profile.account_id:
            raise ValueError(
                f"Profile {self.profile.account_id} does not belong to friend "
                f"{self.friend.account_id}"
            )

    @property
    def account_id(self) -> AccountId:
        return self.friend.account_id


@dataclass(frozen=True, slots=True)
class PlayerSummary:
    """Current-state row for one account ever seen on the friend list."""

    account_id: AccountId
    display_name: str
    profile_url: str
    friend_since: datetime
    updated_at: datetime
    removed_at: datetime | None = None

    @property
    def is_removed(self) -> bool:
        return self.removed_at is not None


@dataclass(frozen=True, slots=True)
class NameHistoryEntry:
    """First observation of ``display_name`` for ``account_id``."""

    account_id: AccountId
    display_name: str
    updated_at: datetime

    @property
    def key(self) -> NameKey:
        return (self.account_id, self.display_name)
