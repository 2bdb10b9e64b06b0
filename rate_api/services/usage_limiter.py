from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from cachetools import TTLCache

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UsageRecord:
    client_key: str
    count: int
    window_started: datetime


class UsageLimiter:
    """Fixed-window request counter per client key.

    A record is inserted on the first request of a window and only mutated
    afterwards, so it expires ``window_seconds`` after that first request.
    """

    def __init__(
        self,
        window_seconds: int = 60,
        capacity: int = 30,
        max_clients: int = 100_000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._capacity = capacity
        self._records: TTLCache[str, UsageRecord] = TTLCache(
            maxsize=max_clients, ttl=window_seconds, timer=timer
        )
        self._lock = threading.Lock()

    def admit(self, client_key: str, region: str | None = None) -> bool:
        with self._lock:
            record = self._records.get(client_key)
            previous = record.count if record is not None else 0
            allowed = previous < self._capacity
            if allowed:
                if record is None:
                    self._records[client_key] = UsageRecord(
                        client_key=client_key,
                        count=1,
                        window_started=datetime.now(UTC),
                    )
                else:
                    record.count += 1

        logger.info(
            "Usage client=%s country=%s usage=%s allowed=%s at=%s",
            client_key,
            region or "-",
            previous,
            allowed,
            datetime.now(UTC).isoformat(timespec="seconds"),
        )
        return allowed

    def usage(self, client_key: str) -> int:
        with self._lock:
            record = self._records.get(client_key)
            return record.count if record is not None else 0
