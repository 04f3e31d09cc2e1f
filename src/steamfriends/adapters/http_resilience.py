"""Rate-limited, retrying async HTTP client with an optional response cache."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from steamfriends.config.http_resilience import (
    TRANSIENT_ERRORS,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import QueryParamTypes, URLTypes

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_cache_storage",
    "build_retry",
]

log = getLogger(__name__)

READ_METHODS = ("GET", "HEAD")


def build_retry(policy: RetryPolicy) -> Retry:
    """Translate ``policy`` into an ``httpx_retries`` schedule that only repeats reads."""

    return Retry(
        total=policy.attempts,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.honour_retry_after,
        allowed_methods=READ_METHODS,
        status_forcelist=tuple(sorted(policy.statuses)),
        retry_on_exceptions=TRANSIENT_ERRORS,
    )


def build_cache_storage(cache: CacheConfig | None) -> AsyncSqliteStorage | None:
    if cache is None or not cache.enabled:
        return None
    return AsyncSqliteStorage(
        database_path=str(cache.path) if cache.path is not None else ":memory:",
        default_ttl=cache.ttl_seconds,
    )


class ResilientClient:
    """Async client that throttles, retries and (optionally) caches GET requests.

    Use it as an async context manager so the underlying connection pool and
    cache storage are released. ``transport`` replaces the network transport
    underneath the retry layer.
    """

    def __init__(
        self, config: ResilienceConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self.config = config
        limit = config.ratelimit
        self._limiter = AsyncLimiter(limit.max_calls, limit.per_seconds) if limit else None

        retrying = RetryTransport(transport=transport, retry=build_retry(config.retry))
        timeout = httpx.Timeout(config.timeout_seconds)
        headers = config.headers()
        storage = build_cache_storage(config.cache)
        if storage is None:
            self._client = httpx.AsyncClient(transport=retrying, timeout=timeout, headers=headers)
        else:
            self._client = AsyncCacheClient(
                transport=retrying, timeout=timeout, headers=headers, storage=storage
            )
        log.debug(
            "HTTP client %r: timeout=%ss, rate limit=%s, cache=%s",
            config.name,
            config.timeout_seconds,
            limit,
            storage is not None,
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(
        self, url: URLTypes, *, params: QueryParamTypes | None = None
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.get(url, params=params)
        async with self._limiter:
            return await self._client.get(url, params=params)
