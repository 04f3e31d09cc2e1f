"""Steam Web API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_var
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

STEAM_BASE_URL = "https://api.steampowered.com/ISteamUser/"
STEAM_TIMEOUT_SECONDS = 10.0
STEAM_USER_AGENT = "steamfriends/0.1 (steam-web-api-consumer)"
ACCOUNT_ID_ENV_VAR = "STEAM_ACCOUNT_ID"


@dataclass(frozen=True)
class SteamConfig:
    """Holds Steam Web API configuration values."""

    api_key: str
    account_id: int
    resilience: ResilienceConfig

    def __repr__(self) -> str:
        return (
            f"SteamConfig(api_key='***', account_id={self.account_id}, "
            f"resilience={self.resilience!r})"
        )


def default_steam_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="steam",
        base_url=STEAM_BASE_URL,
        timeout_seconds=STEAM_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        # one client per endpoint call and each URL is read once, so a cache never hits
        cache=None,
        user_agent=STEAM_USER_AGENT,
    )


def parse_account_id(value: str) -> int:
    """Parse a Steam account id given as decimal text (fits a signed 64-bit column)."""

    try:
        account_id = int(value.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid Steam account id: {value!r}") from exc
    if not 0 < account_id < 2**63:
        raise ConfigurationError(f"Steam account id out of range: {value!r}")
    return account_id


def resolve_account_id() -> int:
    """Read and validate ``STEAM_ACCOUNT_ID``."""
    return parse_account_id(require_env_var(ACCOUNT_ID_ENV_VAR))


def get_steam_config(
    *,
    api_key: str,
    account_id: int | None = None,
    resilience: ResilienceConfig | None = None,
) -> SteamConfig:
    if account_id is None:
        account_id = resolve_account_id()
    return SteamConfig(
        api_key=api_key,
        account_id=account_id,
        resilience=resilience or default_steam_resilience(),
    )
