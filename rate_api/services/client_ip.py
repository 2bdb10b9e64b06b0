from __future__ import annotations

import re

from starlette.requests import Request

UNKNOWN_CLIENT = "unknown"
_MAPPED_PREFIX = "::ffff:"
_DIGITS = re.compile(r"^\d+$")


def normalize_client_ip(ip: str | None) -> str:
    if not ip:
        return UNKNOWN_CLIENT
    cleaned = ip.strip()
    if cleaned.startswith(_MAPPED_PREFIX):
        cleaned = cleaned[len(_MAPPED_PREFIX) :]
    if cleaned == "::1":
        return "127.0.0.1"
    if ":" in cleaned:
        parts = cleaned.split(":")
        # Some proxies append a numeric port to IPv6 peers.
        if len(parts) >= 4 and _DIGITS.match(parts[-1]):
            cleaned = ":".join(parts[:-1])
    return cleaned or UNKNOWN_CLIENT


def client_ip_from_request(request: Request, trust_proxy_headers: bool = False) -> str | None:
    if not trust_proxy_headers:
        return request.client.host if request.client is not None else None
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return None
