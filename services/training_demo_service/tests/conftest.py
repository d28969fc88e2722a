"""
Shared fixtures for Training Demo Service tests.

Builds the real application through ``create_app`` with isolated settings;
outbound HTTP is intercepted with respx at the transport level.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from training_service_libs.config import Environment

from services.training_demo_service.app import create_app
from services.training_demo_service.config import TrainingDemoSettings

STATIC_FILES = {
    "hello.txt": "hello from the public directory\n",
    "styles.css": "body { color: red; }\n",
    "healthz": "static file shadowing a route\n",
}


def make_settings(**overrides: object) -> TrainingDemoSettings:
    """Settings isolated from any .env file in the working directory."""
    return TrainingDemoSettings(_env_file=None, **overrides)  # type: ignore[call-arg]


@pytest.fixture
def static_files() -> dict[str, str]:
    """Top-level files written to the public directory, by name."""
    return dict(STATIC_FILES)


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Public directory populated with a few files."""
    public = tmp_path / "public"
    public.mkdir()
    for name, content in STATIC_FILES.items():
        (public / name).write_text(content, encoding="utf-8")
    (public / "nested").mkdir()
    (public / "nested" / "data.json").write_text('{"nested": true}', encoding="utf-8")
    return public


@pytest.fixture
def app_factory(static_dir: Path) -> Callable[..., FastAPI]:
    """Build apps with production defaults and per-test overrides."""

    def _factory(**overrides: object) -> FastAPI:
        overrides.setdefault("STATIC_DIR", static_dir)
        overrides.setdefault("ENVIRONMENT", Environment.PRODUCTION)
        return create_app(make_settings(**overrides))

    return _factory


@pytest.fixture
def app(app_factory: Callable[..., FastAPI]) -> FastAPI:
    """Production-mode application."""
    return app_factory()


@pytest.fixture
def dev_app(app_factory: Callable[..., FastAPI]) -> FastAPI:
    """Development-mode application."""
    return app_factory(ENVIRONMENT=Environment.DEVELOPMENT)


async def _client_for(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    await app.state.di_container.close()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Client bound to the production-mode application."""
    async for ac in _client_for(app):
        yield ac


@pytest.fixture
async def dev_client(dev_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Client bound to the development-mode application."""
    async for ac in _client_for(dev_app):
        yield ac
