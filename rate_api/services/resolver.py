from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from rate_api.services.rate_cache import RateCache, RateSnapshot
from rate_api.services.rate_fetcher import RateFetcher

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ExchangeResolver:
    """Serves rate tables from the cache, refetching on a miss or near expiry.

    There is no per-currency lock: concurrent resolves of the same stale base
    may each fetch, and the last write wins.
    """

    def __init__(
        self,
        cache: RateCache,
        fetcher: RateFetcher,
        *,
        refresh_margin_ms: int = 100,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache = cache
        self._fetcher = fetcher
        self._refresh_margin_ms = refresh_margin_ms
        self._clock = clock

    async def resolve(self, base_currency: str) -> RateSnapshot | None:
        base = base_currency.upper()

        snapshot = self._cache.get(base)
        if snapshot is None:
            logger.debug("Rate cache miss base=%s", base)
            snapshot = await self._refresh(base)

        if snapshot is not None and self._is_stale(snapshot):
            logger.debug("Rate snapshot near expiry base=%s", base)
            snapshot = await self._refresh(base)

        return snapshot

    def _is_stale(self, snapshot: RateSnapshot) -> bool:
        remaining_ms = (snapshot.next_update - self._clock()).total_seconds() * 1000
        return remaining_ms <= self._refresh_margin_ms

    async def _refresh(self, base: str) -> RateSnapshot | None:
        fetched = await self._fetcher.fetch(base)
        self._cache.put(base, fetched)
        return self._cache.get(base)
