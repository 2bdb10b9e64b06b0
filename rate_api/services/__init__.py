from rate_api.services.container import RateServices, build_services
from rate_api.services.rate_cache import RateCache, RateSnapshot
from rate_api.services.rate_fetcher import RateFetcher
from rate_api.services.resolver import ExchangeResolver
from rate_api.services.usage_limiter import UsageLimiter

__all__ = [
    "ExchangeResolver",
    "RateCache",
    "RateFetcher",
    "RateServices",
    "RateSnapshot",
    "UsageLimiter",
    "build_services",
]
