from __future__ import annotations

import logging

from starlette.requests import Request

from rate_api.config import Settings
from rate_api.errors import GeolocationError, RateApiError, RateLimitError, error_response
from rate_api.services.client_ip import client_ip_from_request, normalize_client_ip
from rate_api.services.container import RateServices

logger = logging.getLogger(__name__)


async def request_gate_middleware(request: Request, call_next):
    services: RateServices = request.app.state.services
    settings: Settings = request.app.state.settings
    client_key = normalize_client_ip(
        client_ip_from_request(request, trust_proxy_headers=settings.trust_proxy_headers)
    )

    try:
        country = await _detect_country(services, request, client_key)
        if not services.limiter.admit(client_key, region=country):
            raise RateLimitError()
    except RateApiError as exc:
        logger.info("Request rejected client=%s status=%s", client_key, exc.status_code)
        return error_response(exc)

    request.state.country = country
    request.state.client_key = client_key
    return await call_next(request)


async def _detect_country(services: RateServices, request: Request, client_key: str) -> str:
    override_ip = request.query_params.get("userIp")
    country = None
    if override_ip:
        country = await services.geolocator.lookup(normalize_client_ip(override_ip))
    if not country:
        country = await services.geolocator.lookup(client_key)
    if not country:
        raise GeolocationError()
    return country
