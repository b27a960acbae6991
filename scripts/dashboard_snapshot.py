"""Fetch every dashboard line once (with retry) and print the result.

Usage:
    uv run python -m scripts.dashboard_snapshot
Uses DASHBOARD_DATA_SOURCE and the other dashboard settings from the
environment or .env. Exits 1 if the refresh failed.
"""

import asyncio
import sys

from adminpanel.application.services.dashboard_orchestrator import DashboardOrchestrator
from adminpanel.core.config import get_settings
from adminpanel.infrastructure.external.dashboard_api.factory import (
    DashboardSourceFactory,
    create_http_client,
)
from adminpanel.infrastructure.services.error_reporter import LoggingErrorReporter
from adminpanel.shared.telemetry.logging import setup_logging


def _print_event(event) -> None:
    print(f"[{event.severity.value}] {event.title}: {event.message}", file=sys.stderr)


async def main() -> None:
    """Run one manual refresh and print summary, series sizes and categories."""
    settings = get_settings()
    setup_logging()
    http_client = (
        create_http_client(settings) if settings.dashboard_data_source == "http" else None
    )
    try:
        source = DashboardSourceFactory.create_data_source(settings, http_client)
        orchestrator = DashboardOrchestrator(
            source, notify=_print_event, reporter=LoggingErrorReporter(), settings=settings
        )
        result = await orchestrator.manual_refresh()
    finally:
        if http_client is not None:
            await http_client.aclose()

    state = orchestrator.state
    if state.summary is not None:
        s = state.summary
        print(f"Users: {s.total_users} ({s.monthly_growth.users:+g}%)")
        print(f"Orders: {s.total_orders} ({s.monthly_growth.orders:+g}%)")
        print(f"Revenue: {s.total_revenue:,.2f} ({s.monthly_growth.revenue:+g}%)")
        print(f"Suppliers: {s.total_suppliers}  Pending verifications: {s.pending_verifications}")
    print(f"Sales points ({state.sales_period}): {len(state.sales_series)}")
    print(f"User growth points ({state.user_growth_period}): {len(state.user_growth_series)}")
    if state.category_distribution is not None:
        dist = state.category_distribution
        for label, count in zip(dist.labels, dist.dataset.data):
            print(f"  {label}: {count:g}")
    if not result.success:
        print(f"Refresh failed after {result.attempts} attempt(s)", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
