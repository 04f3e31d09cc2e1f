"""HTTP client for the Steam Web API (ISteamUser)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING, cast

import httpx
from pydantic import BaseModel, ValidationError

from steamfriends.adapters.http_resilience import ResilienceConfig, ResilientClient
from steamfriends.config.steam import STEAM_BASE_URL
from steamfriends.domain.errors import UpstreamFetchError

from .schema import FriendListResponse, PlayerSummariesResponse
from .translator import parse_friend, parse_profile

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from steamfriends.config.steam import SteamConfig
    from steamfriends.domain.model import AccountId, FriendRecord, ProfileDetails
    from steamfriends.domain.ports.fetching import FriendFetcher

log = getLogger(__name__)

FRIEND_LIST_PATH = "GetFriendList/v0001/"
PLAYER_SUMMARIES_PATH = "GetPlayerSummaries/v0002/"
MAX_IDS_PER_SUMMARY_REQUEST = 100


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class SteamAPIError(UpstreamFetchError):
    """Raised when the Steam Web API rejects a request or returns an unusable payload."""


def _describe_status(status_code: int) -> str:
    if status_code in {401, 403}:
        return (
            f"Steam API refused the request (HTTP {status_code}); check the API key "
            "and that the friend list is public"
        )
    if status_code == 429:
        return "Steam API rate limit exceeded (HTTP 429)"
    return f"Steam API returned HTTP {status_code}"


@dataclass(slots=True)
class SteamFetcher:
    config: SteamConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def list_friends(self, account_id: AccountId) -> list[FriendRecord]:
        return asyncio.run(self._list_friends_async(account_id))

    def get_profile_details(
        self, account_ids: Sequence[AccountId]
    ) -> dict[AccountId, ProfileDetails]:
        if not account_ids:
            return {}
        return asyncio.run(self._get_profile_details_async(account_ids))

    async def _list_friends_async(self, account_id: AccountId) -> list[FriendRecord]:
        params = {
            "key": self.config.api_key,
            "steamid": str(account_id),
            "relationship": "friend",
        }
        async with self.client_factory(self.config.resilience) as client:
            payload = await self._get_json(client, FRIEND_LIST_PATH, params=params)

        response = _validate(FriendListResponse, payload)
        return [parse_friend(friend) for friend in response.friends_list.friends]

    async def _get_profile_details_async(
        self, account_ids: Sequence[AccountId]
    ) -> dict[AccountId, ProfileDetails]:
        profiles: dict[AccountId, ProfileDetails] = {}
        async with self.client_factory(self.config.resilience) as client:
            for chunk in batched(account_ids, MAX_IDS_PER_SUMMARY_REQUEST):
                params = {
                    "key": self.config.api_key,
                    "steamids": ",".join(str(account_id) for account_id in chunk),
                }
                payload = await self._get_json(client, PLAYER_SUMMARIES_PATH, params=params)
                response = _validate(PlayerSummariesResponse, payload)
                for player in response.response.players:
                    profile = parse_profile(player)
                    profiles[profile.account_id] = profile
        log.debug("Fetched %s of %s profile summaries", len(profiles), len(account_ids))
        return profiles

    async def _get_json(
        self,
        client: ResilientClient,
        path: str,
        *,
        params: dict[str, str],
    ) -> object:
        base_url = self.config.resilience.base_url or STEAM_BASE_URL
        # exception messages from httpx carry the full URL, which includes the key
        try:
            response = await client.get(f"{base_url}{path}", params=httpx.QueryParams(params))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            log.debug("Steam %s failed with HTTP %s", path, status_code)
            raise SteamAPIError(_describe_status(status_code), status_code=status_code) from None
        except httpx.HTTPError as exc:
            raise SteamAPIError(f"Steam request {path} failed: {type(exc).__name__}") from None

        try:
            return response.json()
        except ValueError:
            raise SteamAPIError(
                f"Steam {path} returned a non-JSON body", status_code=response.status_code
            ) from None


def _validate[TModel: BaseModel](model: type[TModel], payload: object) -> TModel:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise SteamAPIError(
            f"Unexpected Steam payload for {model.__name__}: {exc.error_count()} error(s)"
        ) from exc


if TYPE_CHECKING:
    _fetcher_check: FriendFetcher = SteamFetcher(config=cast("SteamConfig", object()))
