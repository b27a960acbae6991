"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Wires the shared HTTP
client, the dashboard data source, the notification center and the
orchestrator, then starts the one-time initial dashboard load.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from adminpanel.application.services.dashboard_orchestrator import DashboardOrchestrator
from adminpanel.core.config import get_settings
from adminpanel.infrastructure.external.dashboard_api.factory import (
    DashboardSourceFactory,
    create_http_client,
)
from adminpanel.infrastructure.services.error_reporter import LoggingErrorReporter
from adminpanel.infrastructure.services.notification_center import NotificationCenter
from adminpanel.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), HTTP client (http
    source only), orchestrator, initial load. Shutdown order: orchestrator
    teardown, HTTP client close, telemetry shutdown.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.telemetry_enabled:
        from adminpanel.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig.from_settings(settings)
        if telemetry.start(app):
            set_telemetry(telemetry)

    http_client = None
    if settings.dashboard_data_source == "http":
        http_client = create_http_client(settings)
    app.state.dashboard_http_client = http_client

    data_source = DashboardSourceFactory.create_data_source(settings, http_client)
    notification_center = NotificationCenter(settings.notification_history_size)
    orchestrator = DashboardOrchestrator(
        data_source=data_source,
        notify=notification_center,
        reporter=LoggingErrorReporter(),
        settings=settings,
    )
    app.state.notification_center = notification_center
    app.state.orchestrator = orchestrator
    app.state.initial_load_task = orchestrator.ensure_initial_load()
    logger.info(
        "Dashboard orchestrator started (source=%s)", settings.dashboard_data_source
    )

    yield

    # ---- Shutdown ----
    await orchestrator.aclose()
    app.state.orchestrator = None
    logger.info("Dashboard orchestrator stopped")

    if http_client is not None:
        await http_client.aclose()
        app.state.dashboard_http_client = None
        logger.info("Dashboard HTTP client closed")

    if settings.telemetry_enabled:
        from adminpanel.shared.telemetry.telemetry import get_telemetry, set_telemetry

        active = get_telemetry()
        if active is not None:
            active.shutdown()
        set_telemetry(None)
