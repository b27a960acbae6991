"""Application DTOs: plain dataclasses passed between layers."""

from adminpanel.application.dtos.dashboard import (
    CategoryDataset,
    CategoryDistribution,
    DashboardSummary,
    MonthlyGrowth,
    NotificationEvent,
    SalesPoint,
    UserGrowthPoint,
    ViewState,
)

__all__ = [
    "CategoryDataset",
    "CategoryDistribution",
    "DashboardSummary",
    "MonthlyGrowth",
    "NotificationEvent",
    "SalesPoint",
    "UserGrowthPoint",
    "ViewState",
]
