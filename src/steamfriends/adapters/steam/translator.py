"""Translate Steam payloads into domain records."""

from __future__ import annotations

from datetime import UTC, datetime

from steamfriends.domain.model import FriendRecord, ProfileDetails

from .schema import FriendPayload, PlayerPayload


def parse_friend(payload: FriendPayload) -> FriendRecord:
    return FriendRecord(
        account_id=payload.steam_id,
        friend_since=datetime.fromtimestamp(payload.friend_since, tz=UTC),
    )


def parse_profile(payload: PlayerPayload) -> ProfileDetails:
    return ProfileDetails(
        account_id=payload.steam_id,
        display_name=payload.persona_name,
        profile_url=payload.profile_url,
    )
