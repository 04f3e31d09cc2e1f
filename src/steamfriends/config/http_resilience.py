"""Throttling, retry and cache settings for outbound HTTP reads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from .errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

TRANSIENT_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})
TRANSIENT_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """How often a failed read is repeated before the error reaches the caller."""

    attempts: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    statuses: frozenset[int] = TRANSIENT_STATUSES
    honour_retry_after: bool = True


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float

    def __post_init__(self) -> None:
        if self.max_calls < 1 or self.per_seconds <= 0:
            raise ConfigurationError(
                f"Rate limit needs at least one call per positive window, got {self}"
            )


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """Response cache; ``path=None`` keeps it in memory for the lifetime of one client."""

    enabled: bool = True
    path: Path | None = None
    ttl_seconds: float | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    user_agent: str | None = None

    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers
