from datetime import UTC, datetime

import pytest

from rate_api.services.rate_cache import RateCache, RateSnapshot


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _snapshot(base: str = "usd", **rates: float) -> RateSnapshot:
    return RateSnapshot(
        base_currency=base,
        rates=rates or {"EUR": 0.9},
        next_update=datetime(2026, 3, 21, tzinfo=UTC),
    )


def test_snapshot_uppercases_base_and_freezes_rates() -> None:
    source = {"EUR": 0.9}
    snapshot = _snapshot("usd", **source)
    source["EUR"] = 1.5

    assert snapshot.base_currency == "USD"
    assert snapshot.rates["EUR"] == 0.9
    with pytest.raises(TypeError):
        snapshot.rates["GBP"] = 0.8  # type: ignore[index]


def test_get_is_case_insensitive() -> None:
    cache = RateCache()
    cache.put("usd", _snapshot())

    assert cache.get("USD") is not None
    assert cache.get("usd") is cache.get("USD")
    assert cache.get("EUR") is None


def test_put_replaces_existing_snapshot() -> None:
    cache = RateCache()
    cache.put("USD", _snapshot(EUR=0.9))
    cache.put("USD", _snapshot(EUR=0.95))

    assert cache.get("USD").rates["EUR"] == 0.95
    assert len(cache) == 1


def test_entries_expire_after_ttl_from_insertion() -> None:
    clock = _Clock()
    cache = RateCache(ttl_seconds=86400, timer=clock)
    cache.put("USD", _snapshot())

    clock.now = 86399
    assert cache.get("USD") is not None

    clock.now = 86400
    assert cache.get("USD") is None


def test_put_rejects_empty_rate_table() -> None:
    cache = RateCache()
    empty = RateSnapshot(base_currency="USD", rates={}, next_update=datetime(2026, 3, 21, tzinfo=UTC))

    with pytest.raises(ValueError):
        cache.put("USD", empty)
    assert cache.get("USD") is None


def test_rate_for_missing_code_is_zero() -> None:
    snapshot = _snapshot(EUR=0.9)

    assert snapshot.rate_for("eur") == 0.9
    assert snapshot.rate_for("JPY") == 0.0
