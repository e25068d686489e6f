from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from copydesk.gateway.api.v1 import routers as v1_routers
from copydesk.gateway.config import Settings, get_settings
from copydesk.gateway.exceptions import APIError
from copydesk.gateway.logging_config import (
    RequestContextMiddleware,
    api_error_handler,
    configure_logging,
    unhandled_exception_handler,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.dependency_overrides[get_settings]()
    assert isinstance(settings, Settings)

    configure_logging(settings.log_dir if settings.json_logs else None, settings.log_level)
    logger.info(f"copydesk gateway started (max_body_chars={settings.max_body_chars})")

    yield


def create_app(
    settings: Settings | None = None,
) -> FastAPI:
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Copydesk Gateway",
        version="0.1.0",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    for r in v1_routers:
        app.include_router(r)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
