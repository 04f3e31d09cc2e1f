"""Ports for fetching friend data from an external provider."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from steamfriends.domain.model import AccountId, FriendRecord, ProfileDetails


@runtime_checkable
class FriendFetcher(Protocol):
    """Source of a friend list and the profile details of its members."""

    def list_friends(self, account_id: AccountId) -> Sequence[FriendRecord]: ...

    def get_profile_details(
        self, account_ids: Sequence[AccountId]
    ) -> Mapping[AccountId, ProfileDetails]: ...


type CredentialProvider = Callable[[], str]


__all__ = ["CredentialProvider", "FriendFetcher"]
