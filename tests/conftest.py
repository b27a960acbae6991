"""Pytest configuration and fixtures for adminpanel.

Unit tests drive DashboardOrchestrator with the in-memory FakeDataSource
and a manual clock (tests.fakes). HTTP tests run create_app() behind
httpx.ASGITransport with the mock data source; ASGITransport does not run
the lifespan, so the app fixture enters it explicitly.
"""

import asyncio
from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from adminpanel.application.dtos.dashboard import NotificationEvent
from adminpanel.application.services.dashboard_orchestrator import DashboardOrchestrator
from adminpanel.core.config import Settings, get_settings
from adminpanel.core.lifespan import create_lifespan
from adminpanel.infrastructure.cache.ttl_cell import TTLCacheCell
from adminpanel.main import create_app
from tests.fakes import FakeClock, FakeDataSource


@pytest.fixture
def settings() -> Settings:
    """Deterministic settings independent of the environment."""
    return Settings(
        dashboard_data_source="mock",
        dashboard_cache_ttl_seconds=300.0,
        refresh_timeout_seconds=1.0,
        refresh_retries=2,
        telemetry_enabled=False,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> FakeDataSource:
    return FakeDataSource()


@pytest.fixture
def notifications() -> list[NotificationEvent]:
    """Events received by the orchestrator's notify callback."""
    return []


@pytest.fixture
def orchestrator(
    source: FakeDataSource,
    notifications: list[NotificationEvent],
    clock: FakeClock,
    settings: Settings,
) -> DashboardOrchestrator:
    """Orchestrator over FakeDataSource with a clock-driven summary cache."""
    return DashboardOrchestrator(
        data_source=source,
        notify=notifications.append,
        cache=TTLCacheCell(ttl_seconds=300.0, clock=clock),
        settings=settings,
    )


@pytest.fixture
async def app(monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[FastAPI]:
    """Fresh app on the mock data source, with its lifespan running.

    The initial dashboard load has finished before the app is yielded.
    """
    monkeypatch.setenv("DASHBOARD_DATA_SOURCE", "mock")
    monkeypatch.setenv("TELEMETRY_ENABLED", "false")
    get_settings.cache_clear()
    application = create_app()
    async with create_lifespan(application):
        await asyncio.wait_for(application.state.initial_load_task, timeout=5)
        yield application
    get_settings.cache_clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
