from __future__ import annotations

import ipaddress
import logging
import threading
from typing import Protocol

import httpx
from cachetools import TTLCache

logger = logging.getLogger(__name__)


class SupportsGeoLookup(Protocol):
    async def lookup(self, ip: str | None) -> str | None: ...


def is_public_ip(ip: str) -> bool:
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return address.is_global


class GeoLocator:
    """Resolves an IP address to an ISO country code over an HTTP geo-IP API."""

    def __init__(
        self,
        url_template: str,
        *,
        cache_ttl_seconds: int = 3600,
        max_entries: int = 50_000,
        timeout_seconds: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url_template = url_template
        self._cache: TTLCache[str, str | None] = TTLCache(maxsize=max_entries, ttl=cache_ttl_seconds)
        self._lock = threading.Lock()
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._owns_client = client is None

    async def lookup(self, ip: str | None) -> str | None:
        if not ip or not is_public_ip(ip):
            return None

        with self._lock:
            if ip in self._cache:
                return self._cache[ip]

        try:
            response = await self._client.get(self._url_template.format(ip=ip))
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geo lookup failed ip=%s error=%s", ip, exc)
            return None

        country = _country_from_payload(payload)
        with self._lock:
            self._cache[ip] = country
        return country

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _country_from_payload(payload: object) -> str | None:
    if not isinstance(payload, dict):
        return None
    if payload.get("status") not in (None, "success"):
        return None
    for key in ("countryCode", "country_code", "country"):
        value = payload.get(key)
        if isinstance(value, str) and len(value.strip()) == 2:
            return value.strip().upper()
    return None
