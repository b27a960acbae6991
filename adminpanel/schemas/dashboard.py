"""Dashboard API schemas (responses of /api/v1/dashboard)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from adminpanel.application.dtos.dashboard import (
    CategoryDistribution,
    DashboardSummary,
    SalesPoint,
    UserGrowthPoint,
    ViewState,
)
from adminpanel.domain.exceptions import AdminPanelException


class MonthlyGrowthResponse(BaseModel):
    users: float
    orders: float
    revenue: float


class DashboardSummaryResponse(BaseModel):
    """Stat card counters plus month-over-month growth."""

    total_users: int
    total_suppliers: int
    total_orders: int
    total_revenue: float
    pending_verifications: int
    active_users: int
    monthly_growth: MonthlyGrowthResponse

    @classmethod
    def from_dto(cls, summary: DashboardSummary) -> "DashboardSummaryResponse":
        growth = summary.monthly_growth
        return cls(
            total_users=summary.total_users,
            total_suppliers=summary.total_suppliers,
            total_orders=summary.total_orders,
            total_revenue=summary.total_revenue,
            pending_verifications=summary.pending_verifications,
            active_users=summary.active_users,
            monthly_growth=MonthlyGrowthResponse(
                users=growth.users, orders=growth.orders, revenue=growth.revenue
            ),
        )


class SalesPointResponse(BaseModel):
    date: str
    amount: float
    orders: int


class UserGrowthPointResponse(BaseModel):
    date: str
    users: int
    new_users: int
    total_users: int


class CategoryDatasetResponse(BaseModel):
    data: list[float]
    background_color: list[str]
    border_width: int


class CategoryDistributionResponse(BaseModel):
    """Chart-ready distribution: labels and one dataset."""

    labels: list[str]
    datasets: list[CategoryDatasetResponse]

    @classmethod
    def from_dto(cls, dist: CategoryDistribution) -> "CategoryDistributionResponse":
        return cls(
            labels=list(dist.labels),
            datasets=[
                CategoryDatasetResponse(
                    data=list(dist.dataset.data),
                    background_color=list(dist.dataset.background_color),
                    border_width=dist.dataset.border_width,
                )
            ],
        )


class ErrorInfo(BaseModel):
    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: AdminPanelException) -> "ErrorInfo":
        return cls(error=exc.error_code, message=exc.message, details=exc.details)


def sales_points(points: list[SalesPoint] | tuple[SalesPoint, ...]) -> list[SalesPointResponse]:
    return [SalesPointResponse(date=p.date, amount=p.amount, orders=p.orders) for p in points]


def user_growth_points(
    points: list[UserGrowthPoint] | tuple[UserGrowthPoint, ...],
) -> list[UserGrowthPointResponse]:
    return [
        UserGrowthPointResponse(
            date=p.date, users=p.users, new_users=p.new_users, total_users=p.total_users
        )
        for p in points
    ]


class DashboardViewResponse(BaseModel):
    """Read-only projection of the orchestrator's ViewState."""

    summary: DashboardSummaryResponse | None = None
    sales_series: list[SalesPointResponse] = Field(default_factory=list)
    sales_period: str
    user_growth_series: list[UserGrowthPointResponse] = Field(default_factory=list)
    user_growth_period: str
    category_distribution: CategoryDistributionResponse | None = None
    is_loading: bool
    error: ErrorInfo | None = None
    summary_cache_age_seconds: float | None = None

    @classmethod
    def from_state(
        cls, state: ViewState, summary_cache_age: float | None = None
    ) -> "DashboardViewResponse":
        return cls(
            summary=DashboardSummaryResponse.from_dto(state.summary) if state.summary else None,
            sales_series=sales_points(state.sales_series),
            sales_period=state.sales_period,
            user_growth_series=user_growth_points(state.user_growth_series),
            user_growth_period=state.user_growth_period,
            category_distribution=(
                CategoryDistributionResponse.from_dto(state.category_distribution)
                if state.category_distribution
                else None
            ),
            is_loading=state.is_loading,
            error=ErrorInfo.from_exception(state.error) if state.error else None,
            summary_cache_age_seconds=summary_cache_age,
        )


class RefreshResponse(BaseModel):
    """Outcome of POST /dashboard/refresh."""

    success: bool
    attempts: int
    error: ErrorInfo | None = None
    dashboard: DashboardViewResponse
