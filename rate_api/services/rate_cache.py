from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from cachetools import TTLCache


@dataclass(frozen=True, slots=True)
class RateSnapshot:
    base_currency: str
    rates: Mapping[str, float] = field(repr=False)
    next_update: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_currency", self.base_currency.upper())
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def rate_for(self, code: str) -> float:
        return float(self.rates.get(code.upper(), 0))


class RateCache:
    """Per-base-currency snapshots that expire a fixed time after insertion.

    Expiry here is independent of ``RateSnapshot.next_update``; staleness
    against the provider's schedule is decided by the resolver.
    """

    def __init__(
        self,
        ttl_seconds: int = 86400,
        max_entries: int = 512,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: TTLCache[str, RateSnapshot] = TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )
        self._lock = threading.Lock()

    def get(self, base_currency: str) -> RateSnapshot | None:
        with self._lock:
            return self._store.get(base_currency.upper())

    def put(self, base_currency: str, snapshot: RateSnapshot) -> None:
        if not snapshot.rates:
            raise ValueError(f"Refusing to cache empty rate table for {base_currency}")
        with self._lock:
            self._store[base_currency.upper()] = snapshot

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
