"""Public interface for the Steam Web API adapter."""

from __future__ import annotations

from .client import SteamAPIError, SteamFetcher
from .schema import FriendListResponse, FriendPayload, PlayerPayload, PlayerSummariesResponse
from .translator import parse_friend, parse_profile

__all__ = [
    "FriendListResponse",
    "FriendPayload",
    "PlayerPayload",
    "PlayerSummariesResponse",
    "SteamAPIError",
    "SteamFetcher",
    "parse_friend",
    "parse_profile",
]
