from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from rate_api.config import Settings
from rate_api.db import build_engine, build_session_factory, close_db
from rate_api.services.geolocation import GeoLocator, SupportsGeoLookup
from rate_api.services.rate_cache import RateCache
from rate_api.services.rate_fetcher import RateFetcher
from rate_api.services.rate_recorder import RateRecorder
from rate_api.services.resolver import ExchangeResolver
from rate_api.services.usage_limiter import UsageLimiter


@dataclass(slots=True)
class RateServices:
    """Process-wide service objects, built once and shared by every request."""

    cache: RateCache
    fetcher: RateFetcher
    resolver: ExchangeResolver
    limiter: UsageLimiter
    geolocator: SupportsGeoLookup
    recorder: RateRecorder | None = None
    engine: AsyncEngine | None = None

    async def close(self) -> None:
        await self.fetcher.close()
        close = getattr(self.geolocator, "close", None)
        if close is not None:
            await close()
        if self.engine is not None:
            await close_db(self.engine)


def build_services(settings: Settings) -> RateServices:
    cache = RateCache(
        ttl_seconds=settings.rate_cache_ttl_seconds,
        max_entries=settings.rate_cache_max_entries,
    )
    fetcher = RateFetcher(
        settings.exchange_api,
        settings.exchange_api2,
        timeout_seconds=settings.request_timeout_seconds,
    )
    resolver = ExchangeResolver(
        cache,
        fetcher,
        refresh_margin_ms=settings.rate_refresh_margin_ms,
    )
    limiter = UsageLimiter(
        window_seconds=settings.usage_window_seconds,
        capacity=settings.usage_capacity,
        max_clients=settings.usage_max_clients,
    )
    geolocator = GeoLocator(
        settings.geo_lookup_url,
        cache_ttl_seconds=settings.geo_cache_ttl_seconds,
        timeout_seconds=settings.request_timeout_seconds,
    )
    engine = build_engine(settings.database_url) if settings.record_rates else None
    recorder = RateRecorder(build_session_factory(engine)) if engine is not None else None
    return RateServices(
        cache=cache,
        fetcher=fetcher,
        resolver=resolver,
        limiter=limiter,
        geolocator=geolocator,
        recorder=recorder,
        engine=engine,
    )
