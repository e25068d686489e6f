import httpx
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient

from copydesk.gateway import create_app
from copydesk.gateway.config import Settings


@pytest_asyncio.fixture(scope="function")
async def app(tmp_path) -> FastAPI:
    settings = Settings(
        cors_origins=["*"],
        max_body_chars=5_000,
        log_dir=tmp_path / "logs",
        log_level="DEBUG",
        json_logs=False,
    )

    app = create_app(settings)

    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client
