from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class RateApiError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(RateApiError):
    status_code = 422


class UnsupportedCurrencyError(RateApiError):
    status_code = 422


class UpstreamError(RateApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class GeolocationError(RateApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("Couldn't detect origin")


class RateLimitError(RateApiError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("Exceeded limit")


def error_response(exc: RateApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


async def rate_api_error_handler(request: Request, exc: RateApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("Request failed path=%s message=%s", request.url.path, exc.message)
    return error_response(exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return PlainTextResponse("Path not found", status_code=status.HTTP_404_NOT_FOUND)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error path=%s", request.url.path)
    message = str(exc).strip() or "Unknown error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": message},
    )
