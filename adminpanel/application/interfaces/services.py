"""Service interfaces (ports) for the application layer.

Protocols define the collaborators the dashboard orchestrator consumes
(DIP). Implementations live in adminpanel.infrastructure.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from adminpanel.application.dtos.dashboard import (
        CategoryDistribution,
        DashboardSummary,
        NotificationEvent,
        SalesPoint,
        UserGrowthPoint,
    )
    from adminpanel.domain.exceptions import AdminPanelException


# Dashboard data source interface
class IDashboardDataSource(Protocol):
    """Protocol for the four dashboard fetches (HTTP + transform)."""

    async def get_summary(self) -> DashboardSummary:
        """Return aggregate counters and monthly growth."""
        ...

    async def get_sales_series(self, period: str) -> list[SalesPoint]:
        """Return the sales series for day, week, month or year."""
        ...

    async def get_user_growth_series(self, period: str) -> list[UserGrowthPoint]:
        """Return the user growth series for week, month or year."""
        ...

    async def get_category_distribution(self) -> CategoryDistribution:
        """Return category counts as chart labels, values and colors."""
        ...


# Error reporter interface
class IErrorReporter(Protocol):
    """Protocol for error telemetry (logging, tracing, external reporting)."""

    def report(self, error: AdminPanelException, context: str) -> None:
        """Record error with a short context label (e.g. 'Dashboard Refresh')."""
        ...


NotifyCallback = Callable[["NotificationEvent"], None]
