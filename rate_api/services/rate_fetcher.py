from __future__ import annotations

import logging
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

from rate_api.errors import UpstreamError
from rate_api.services.rate_cache import RateSnapshot

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch exchange data"
NO_SCHEDULED_UPDATE = datetime.max.replace(tzinfo=UTC)


class ProviderError(RuntimeError):
    """Raised when a single provider call fails or reports no success."""


class RateFetcher:
    def __init__(
        self,
        primary_url: str,
        secondary_url: str | None = None,
        *,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._primary_url = primary_url
        self._secondary_url = secondary_url or None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._owns_client = client is None

    async def fetch(self, base_currency: str) -> RateSnapshot:
        base = base_currency.upper()
        try:
            payload = await self._call(self._primary_url, base)
        except ProviderError as exc:
            logger.warning("Primary rate provider failed base=%s error=%s", base, exc)
            if not self._secondary_url:
                raise UpstreamError(FETCH_FAILED_MESSAGE) from exc
            try:
                payload = await self._call(self._secondary_url, base)
            except ProviderError as secondary_exc:
                logger.error("Secondary rate provider failed base=%s error=%s", base, secondary_exc)
                raise UpstreamError(FETCH_FAILED_MESSAGE) from secondary_exc

        snapshot = RateSnapshot(
            base_currency=base,
            rates=_extract_rates(payload),
            next_update=_extract_next_update(payload),
        )
        logger.info(
            "Fetched rates base=%s currencies=%s next_update=%s",
            base,
            len(snapshot.rates),
            snapshot.next_update.isoformat(),
        )
        return snapshot

    async def _call(self, base_url: str, base: str) -> dict[str, Any]:
        url = f"{base_url}{base}"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise ProviderError(f"{type(exc).__name__}: {exc}") from exc
        if not response.is_success:
            raise ProviderError(f"HTTP {response.status_code} from provider")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Provider returned invalid JSON") from exc
        if not isinstance(payload, dict) or not _reports_success(payload):
            raise ProviderError("Provider did not report success")
        if not _extract_rates(payload):
            raise ProviderError("Provider returned an empty rate table")
        return payload

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _reports_success(payload: dict[str, Any]) -> bool:
    return payload.get("result") == "success" or payload.get("success") is True


def _extract_rates(payload: dict[str, Any]) -> dict[str, float]:
    table = payload.get("rates") or payload.get("conversion_rates") or {}
    if not isinstance(table, dict):
        return {}
    rates: dict[str, float] = {}
    for code, value in table.items():
        try:
            rates[str(code).upper()] = float(value)
        except (TypeError, ValueError):
            continue
    return rates


def _extract_next_update(payload: dict[str, Any]) -> datetime:
    raw_utc = payload.get("time_next_update_utc")
    if isinstance(raw_utc, str) and raw_utc.strip():
        try:
            parsed = parsedate_to_datetime(raw_utc)
        except (TypeError, ValueError):
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=UTC)
            return parsed.astimezone(UTC)

    raw_unix = payload.get("time_next_update_unix")
    if isinstance(raw_unix, (int, float)):
        return datetime.fromtimestamp(raw_unix, tz=UTC)

    # Unknown schedule: only the cache TTL evicts the snapshot.
    return NO_SCHEDULED_UPDATE
