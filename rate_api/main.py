from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from rate_api import errors
from rate_api.api.gate import request_gate_middleware
from rate_api.api.routes import router
from rate_api.config import Settings, get_settings
from rate_api.db import init_db
from rate_api.logging import configure_logging
from rate_api.services.container import RateServices, build_services

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    services: RateServices | None = None,
) -> FastAPI:
    """Build the API.

    ``services`` lets tests inject pre-built service objects; when omitted they
    are constructed in the lifespan and closed on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned: RateServices | None = None
        if getattr(app.state, "services", None) is None:
            owned = build_services(settings)
            if owned.engine is not None:
                await init_db(owned.engine)
            app.state.services = owned
        logger.info("Rate API started name=%s", settings.app_name)

        yield

        if owned is not None:
            await owned.close()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.services = services

    app.add_exception_handler(errors.RateApiError, errors.rate_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(Exception, errors.unhandled_error_handler)

    app.middleware("http")(request_gate_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


configure_logging(get_settings().log_level)
app = create_app()
