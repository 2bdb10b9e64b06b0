from __future__ import annotations

import json
import math
import random
from contextlib import suppress

from fastapi import APIRouter, Query, Request, status
from sqlalchemy.exc import SQLAlchemyError

from rate_api import currencies
from rate_api.config import Settings
from rate_api.currencies import CurrencyDescriptor
from rate_api.errors import (
    RateApiError,
    UnsupportedCurrencyError,
    UpstreamError,
    ValidationError,
)
from rate_api.schemas import (
    ConversionInfo,
    ConversionResponse,
    CurrenciesResponse,
    CurrencyOut,
    LatestResponse,
    RateInfo,
    RateResponse,
    StatusResponse,
)
from rate_api.services.container import RateServices
from rate_api.services.conversion import convert
from rate_api.services.rate_cache import RateSnapshot

router = APIRouter()

_BAD_REQUEST = status.HTTP_400_BAD_REQUEST
_SERVER_ERROR = status.HTTP_500_INTERNAL_SERVER_ERROR


def _services(request: Request) -> RateServices:
    return request.app.state.services


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _caller_country(request: Request) -> str | None:
    return getattr(request.state, "country", None)


def _parse_amount(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError("Invalid amount", status_code=_BAD_REQUEST) from None
    if not math.isfinite(value):
        raise ValidationError("Invalid amount", status_code=_BAD_REQUEST)
    return value


async def _resolve(services: RateServices, base: str) -> RateSnapshot:
    snapshot = await services.resolver.resolve(base)
    if snapshot is None:
        raise UpstreamError("Couldn't get exchange rate")
    return snapshot


async def _record_rate(services: RateServices, source: str, target: str, rate: float) -> None:
    if services.recorder is None or rate <= 0:
        return
    # Historical rates are best-effort; a failed write never reaches the caller.
    with suppress(SQLAlchemyError, OSError):
        await services.recorder.record_rate(source, target, rate)


def _conversion_response(
    snapshot: RateSnapshot, target: CurrencyDescriptor, amount: float
) -> ConversionResponse:
    result = convert(snapshot, target, amount)
    return ConversionResponse(info=ConversionInfo.model_validate(result.to_info()))


@router.get("/convert", response_model=ConversionResponse)
async def convert_amount(
    request: Request,
    from_: str | None = Query(default=None, alias="from"),
    to: str | None = Query(default=None),
    amount: str | None = Query(default=None),
) -> ConversionResponse:
    if not from_ or not to or not amount:
        raise ValidationError("Missing required parameters", status_code=_BAD_REQUEST)

    source = from_.strip().upper()
    target_code = to.strip().upper()
    value = _parse_amount(amount)
    if not currencies.is_supported(source):
        raise UnsupportedCurrencyError("Unsupported Currency", status_code=_BAD_REQUEST)
    target = currencies.by_code(target_code)
    if target is None:
        raise UnsupportedCurrencyError("Unsupported Currency")

    services = _services(request)
    snapshot = await _resolve(services, source)
    response = _conversion_response(snapshot, target, value)
    await _record_rate(services, source, target.code, snapshot.rate_for(target.code))
    return response


@router.get("/auto-convert", response_model=ConversionResponse)
async def auto_convert(
    request: Request,
    default_country: str | None = Query(default=None, alias="defaultCountry"),
    amount: str | None = Query(default=None),
    from_: str | None = Query(default=None, alias="from"),
) -> ConversionResponse:
    settings = _settings(request)
    country = _caller_country(request) or default_country or settings.default_country
    try:
        target = currencies.for_country(country)
        if target is None:
            raise UnsupportedCurrencyError(f"No currency known for country {country}")
        value = _parse_amount(amount)
        source = (from_ or "USD").strip().upper()
        snapshot = await _resolve(_services(request), source)
    except RateApiError as exc:
        raise RateApiError(exc.message, status_code=_SERVER_ERROR) from exc

    return _conversion_response(snapshot, target, value)


@router.get("/auto-toggle", response_model=ConversionResponse)
async def auto_toggle(
    request: Request,
    between: str | None = Query(default=None),
    from_: str | None = Query(default=None, alias="from"),
    amount: str | None = Query(default=None),
) -> ConversionResponse:
    if not between or not from_ or not amount:
        raise ValidationError("No currency passed")

    settings = _settings(request)
    try:
        value = _parse_amount(amount)
        candidates = _parse_between(between)
        country = _caller_country(request) or settings.default_country
        caller = currencies.for_country(country) or currencies.for_country(settings.default_country)
        target = caller
        if target is None or target.code not in candidates:
            target = _toggle_target(random.choice(candidates), caller)
        snapshot = await _resolve(_services(request), from_.strip().upper())
    except RateApiError as exc:
        raise RateApiError(exc.message, status_code=_SERVER_ERROR) from exc

    return _conversion_response(snapshot, target, value)


def _toggle_target(code: str, caller: CurrencyDescriptor | None) -> CurrencyDescriptor:
    known = currencies.by_code(code)
    if known is not None:
        return known
    # Codes outside the static table keep the caller's display data and convert at rate 0.
    return CurrencyDescriptor(
        code=code,
        symbol=caller.symbol if caller else "",
        name=caller.name if caller else code,
    )


def _parse_between(raw: str) -> list[str]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("between must be a JSON array") from None
    if not isinstance(parsed, list):
        parsed = ["USD"]
    codes: list[str] = []
    for item in parsed:
        if not isinstance(item, str):
            raise ValidationError("between must only contain strings")
        codes.append(item.strip().upper())
    if not codes:
        raise ValidationError("No currency passed")
    return codes


@router.get("/rate", response_model=RateResponse)
async def get_rate(
    request: Request,
    from_: str | None = Query(default=None, alias="from"),
    to: str | None = Query(default=None),
) -> RateResponse:
    if not from_ or not to:
        raise ValidationError("Missing required parameters")

    source = from_.strip().upper()
    target = to.strip().upper()
    services = _services(request)
    snapshot = await _resolve(services, source)
    if target not in snapshot.rates:
        raise UnsupportedCurrencyError("Unsupported Currency")

    rate = snapshot.rate_for(target)
    await _record_rate(services, source, target, rate)
    return RateResponse(info=RateInfo(from_currency=source, to_currency=target, rate=rate))


@router.get("/latest", response_model=LatestResponse)
async def latest_rates(
    request: Request,
    base: str | None = Query(default=None),
) -> LatestResponse:
    if not base:
        raise ValidationError("Missing base currency")

    snapshot = await _resolve(_services(request), base.strip().upper())
    return LatestResponse(base=snapshot.base_currency, rates=dict(snapshot.rates))


@router.get("/currencies", response_model=CurrenciesResponse)
async def list_currencies() -> CurrenciesResponse:
    return CurrenciesResponse(
        currencies={
            country: CurrencyOut.model_validate(payload)
            for country, payload in currencies.as_jsonable().items()
        }
    )


@router.get("/status", response_model=StatusResponse)
async def service_status(request: Request) -> StatusResponse:
    return StatusResponse(message=f"{_settings(request).app_name} is running")
