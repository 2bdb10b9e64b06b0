from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from rate_api.config import Settings
from rate_api.errors import UpstreamError
from rate_api.main import create_app
from rate_api.services.container import RateServices
from rate_api.services.rate_cache import RateCache, RateSnapshot
from rate_api.services.rate_fetcher import RateFetcher
from rate_api.services.resolver import ExchangeResolver
from rate_api.services.usage_limiter import UsageLimiter

CLIENT_IP = "203.0.113.7"
RATES = {"USD": 1.0, "EUR": 0.92, "GBP": 0.79, "MYR": 4.7}


class _FakeFetcher:
    def __init__(self, rates: dict[str, float] | None = None) -> None:
        self.rates = rates or RATES
        self.calls: list[str] = []
        self.fail = False

    async def fetch(self, base_currency: str) -> RateSnapshot:
        self.calls.append(base_currency)
        if self.fail:
            raise UpstreamError("Failed to fetch exchange data")
        return RateSnapshot(
            base_currency=base_currency,
            rates=self.rates,
            next_update=datetime.now(UTC) + timedelta(hours=12),
        )

    async def close(self) -> None:
        return None


class _FakeGeo:
    def __init__(self, countries: dict[str, str] | None = None, default: str | None = "US") -> None:
        self.countries = countries or {}
        self.default = default

    async def lookup(self, ip: str | None) -> str | None:
        return self.countries.get(ip or "", self.default)


class _Recorder:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, float]] = []

    async def record_rate(self, from_currency, to_currency, rate, date=None) -> bool:
        self.records.append((from_currency, to_currency, rate))
        return True


def _services(fetcher=None, geo=None, recorder=None, capacity: int = 30) -> RateServices:
    cache = RateCache()
    fetcher = fetcher or _FakeFetcher()
    return RateServices(
        cache=cache,
        fetcher=fetcher,
        resolver=ExchangeResolver(cache, fetcher),
        limiter=UsageLimiter(window_seconds=60, capacity=capacity),
        geolocator=geo or _FakeGeo(),
        recorder=recorder,
    )


def _client(
    services: RateServices, ip: str = CLIENT_IP, settings: Settings | None = None
) -> httpx.AsyncClient:
    app = create_app(settings or Settings(record_rates=False), services=services)
    transport = httpx.ASGITransport(app=app, client=(ip, 51000))
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest.mark.asyncio
async def test_convert_returns_product_and_rounded_price_tag() -> None:
    recorder = _Recorder()
    async with _client(_services(recorder=recorder)) as client:
        response = await client.get("/convert", params={"from": "usd", "to": "eur", "amount": "100"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["info"] == {
        "currencySymbol": "€",
        "priceTag": "€92.00",
        "amount": 0.92 * 100,
        "currencyCode": "EUR",
        "currencyName": "Euro",
    }
    assert recorder.records == [("USD", "EUR", 0.92)]


@pytest.mark.asyncio
async def test_convert_target_missing_from_rates_returns_zero() -> None:
    async with _client(_services()) as client:
        response = await client.get("/convert", params={"from": "USD", "to": "JPY", "amount": "10"})

    assert response.status_code == 200
    info = response.json()["info"]
    assert info["amount"] == 0
    assert info["priceTag"] == "¥0.00"
    assert info["currencyCode"] == "JPY"


@pytest.mark.asyncio
async def test_convert_twice_fetches_once() -> None:
    fetcher = _FakeFetcher()
    async with _client(_services(fetcher=fetcher)) as client:
        for _ in range(2):
            response = await client.get("/convert", params={"from": "USD", "to": "GBP", "amount": "5"})
            assert response.status_code == 200

    assert fetcher.calls == ["USD"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"to": "EUR", "amount": "1"},
        {"from": "USD", "amount": "1"},
        {"from": "USD", "to": "EUR"},
    ],
)
async def test_convert_missing_params_is_rejected_before_fetch(params: dict) -> None:
    fetcher = _FakeFetcher()
    async with _client(_services(fetcher=fetcher)) as client:
        response = await client.get("/convert", params=params)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Missing required parameters"}
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_convert_unsupported_currencies() -> None:
    async with _client(_services()) as client:
        source = await client.get("/convert", params={"from": "ABC", "to": "EUR", "amount": "1"})
        target = await client.get("/convert", params={"from": "USD", "to": "ABC", "amount": "1"})
        amount = await client.get("/convert", params={"from": "USD", "to": "EUR", "amount": "ten"})

    assert source.status_code == 400
    assert target.status_code == 422
    assert target.json()["message"] == "Unsupported Currency"
    assert amount.status_code == 400


@pytest.mark.asyncio
async def test_upstream_failure_surfaces_500_with_message() -> None:
    calls: list[str] = []

    def _provider(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.host)
        if request.url.host == "primary.example":
            return httpx.Response(200, json={"result": "error"})
        return httpx.Response(500, text="down")

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_provider))
    fetcher = RateFetcher(
        "https://primary.example/latest/",
        "https://secondary.example/latest/",
        client=http_client,
    )
    async with _client(_services(fetcher=fetcher)) as client:
        rate = await client.get("/rate", params={"from": "USD", "to": "EUR"})
        converted = await client.get("/convert", params={"from": "USD", "to": "EUR", "amount": "1"})

    for response in (rate, converted):
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Failed to fetch exchange data"}
    assert calls == ["primary.example", "secondary.example"] * 2


@pytest.mark.asyncio
async def test_thirty_first_request_is_rejected() -> None:
    async with _client(_services()) as client:
        for _ in range(30):
            response = await client.get("/status")
            assert response.status_code == 200
        rejected = await client.get("/status")

    assert rejected.status_code == 400
    assert rejected.json() == {"success": False, "message": "Exceeded limit"}


@pytest.mark.asyncio
async def test_limit_key_uses_normalized_ip() -> None:
    services = _services(capacity=1)
    async with _client(services, ip="::ffff:192.0.2.1") as client:
        assert (await client.get("/status")).status_code == 200
    async with _client(services, ip="192.0.2.1") as client:
        assert (await client.get("/status")).status_code == 400


@pytest.mark.asyncio
async def test_forwarded_for_cannot_rotate_limit_key_by_default() -> None:
    async with _client(_services(capacity=1)) as client:
        assert (await client.get("/status")).status_code == 200
        spoofed = await client.get("/status", headers={"X-Forwarded-For": "198.51.100.99"})

    assert spoofed.status_code == 400
    assert spoofed.json()["message"] == "Exceeded limit"


@pytest.mark.asyncio
async def test_forwarded_for_keys_limit_behind_trusted_proxy() -> None:
    settings = Settings(record_rates=False, trust_proxy_headers=True)
    async with _client(_services(capacity=1), settings=settings) as client:
        first = await client.get("/status", headers={"X-Forwarded-For": "198.51.100.1"})
        second = await client.get("/status", headers={"X-Forwarded-For": "198.51.100.2"})
        repeat = await client.get("/status", headers={"X-Forwarded-For": "198.51.100.1, 10.0.0.2"})

    assert [first.status_code, second.status_code, repeat.status_code] == [200, 200, 400]

@pytest.mark.asyncio
async def test_undetected_origin_is_unauthorized() -> None:
    async with _client(_services(geo=_FakeGeo(default=None))) as client:
        response = await client.get("/status")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Couldn't detect origin"}


@pytest.mark.asyncio
async def test_user_ip_override_sets_country() -> None:
    geo = _FakeGeo(countries={"198.51.100.20": "GB"}, default=None)
    async with _client(_services(geo=geo)) as client:
        response = await client.get(
            "/auto-convert", params={"amount": "10", "from": "USD", "userIp": "198.51.100.20"}
        )

    assert response.status_code == 200
    assert response.json()["info"]["currencyCode"] == "GBP"


@pytest.mark.asyncio
async def test_auto_convert_uses_geolocated_currency() -> None:
    geo = _FakeGeo(countries={CLIENT_IP: "MY"})
    async with _client(_services(geo=geo)) as client:
        response = await client.get("/auto-convert", params={"amount": "2", "from": "usd"})

    info = response.json()["info"]
    assert response.status_code == 200
    assert info["currencyCode"] == "MYR"
    assert info["priceTag"] == "RM9.40"


@pytest.mark.asyncio
async def test_auto_convert_resolution_failure_is_500() -> None:
    fetcher = _FakeFetcher()
    fetcher.fail = True
    async with _client(_services(fetcher=fetcher)) as client:
        response = await client.get("/auto-convert", params={"amount": "2", "from": "USD"})

    assert response.status_code == 500
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_auto_toggle_picks_from_between_when_caller_currency_absent() -> None:
    async with _client(_services()) as client:
        for _ in range(5):
            response = await client.get(
                "/auto-toggle",
                params={"between": json.dumps(["eur", "JPY"]), "from": "USD", "amount": "3"},
            )
            assert response.status_code == 200
            assert response.json()["info"]["currencyCode"] in {"EUR", "JPY"}

        single = await client.get(
            "/auto-toggle", params={"between": '["JPY"]', "from": "USD", "amount": "3"}
        )

    assert single.json()["info"]["currencyCode"] == "JPY"
    assert single.json()["info"]["currencySymbol"] == "¥"


@pytest.mark.asyncio
async def test_auto_toggle_keeps_caller_currency_when_listed() -> None:
    async with _client(_services()) as client:
        response = await client.get(
            "/auto-toggle", params={"between": '["EUR", "USD"]', "from": "EUR", "amount": "1"}
        )

    assert response.json()["info"]["currencyCode"] == "USD"


@pytest.mark.asyncio
async def test_auto_toggle_accepts_codes_outside_currency_table() -> None:
    async with _client(_services()) as client:
        for _ in range(20):
            response = await client.get(
                "/auto-toggle",
                params={"between": json.dumps(["EUR", "XBT"]), "from": "USD", "amount": "1"},
            )
            assert response.status_code == 200

        unknown = await client.get(
            "/auto-toggle", params={"between": '["xbt"]', "from": "USD", "amount": "4"}
        )

    assert unknown.status_code == 200
    assert unknown.json()["info"] == {
        "currencySymbol": "$",
        "priceTag": "$0.00",
        "amount": 0,
        "currencyCode": "XBT",
        "currencyName": "United States Dollar",
    }


@pytest.mark.asyncio
async def test_auto_toggle_errors() -> None:
    async with _client(_services()) as client:
        missing = await client.get("/auto-toggle", params={"from": "USD", "amount": "1"})
        bad_json = await client.get(
            "/auto-toggle", params={"between": "[EUR", "from": "USD", "amount": "1"}
        )
        not_strings = await client.get(
            "/auto-toggle", params={"between": "[1, 2]", "from": "USD", "amount": "1"}
        )

    assert missing.status_code == 422
    assert missing.json()["message"] == "No currency passed"
    assert bad_json.status_code == 500
    assert not_strings.status_code == 500
    assert not_strings.json()["message"] == "between must only contain strings"


@pytest.mark.asyncio
async def test_rate_endpoint() -> None:
    recorder = _Recorder()
    async with _client(_services(recorder=recorder)) as client:
        ok = await client.get("/rate", params={"from": "usd", "to": "gbp"})
        missing = await client.get("/rate", params={"from": "USD"})
        unknown = await client.get("/rate", params={"from": "USD", "to": "JPY"})

    assert ok.status_code == 200
    assert ok.json() == {"success": True, "info": {"from": "USD", "to": "GBP", "rate": 0.79}}
    assert missing.status_code == 422
    assert unknown.status_code == 422
    assert recorder.records == [("USD", "GBP", 0.79)]


@pytest.mark.asyncio
async def test_latest_endpoint() -> None:
    async with _client(_services()) as client:
        ok = await client.get("/latest", params={"base": "usd"})
        missing = await client.get("/latest")

    assert ok.json() == {"success": True, "base": "USD", "rates": RATES}
    assert missing.status_code == 422


@pytest.mark.asyncio
async def test_currencies_and_status() -> None:
    async with _client(_services()) as client:
        currencies = await client.get("/currencies")
        status = await client.get("/status")

    assert currencies.json()["success"] is True
    assert currencies.json()["currencies"]["US"] == {
        "code": "USD",
        "symbol": "$",
        "name": "United States Dollar",
    }
    assert status.json()["success"] is True


@pytest.mark.asyncio
async def test_unknown_path_is_plain_text_404() -> None:
    async with _client(_services()) as client:
        response = await client.get("/nowhere")

    assert response.status_code == 404
    assert response.text == "Path not found"
