"""DTOs for the dashboard view (no dependency on HTTP or pydantic)."""

from __future__ import annotations

from dataclasses import dataclass, field

from adminpanel.domain.enums import Severity
from adminpanel.domain.exceptions import AdminPanelException


@dataclass(frozen=True)
class MonthlyGrowth:
    """Month-over-month growth, signed percentages."""

    users: float
    orders: float
    revenue: float


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregate counters shown on the stat cards."""

    total_users: int
    total_suppliers: int
    total_orders: int
    total_revenue: float
    pending_verifications: int
    active_users: int
    monthly_growth: MonthlyGrowth


@dataclass(frozen=True)
class SalesPoint:
    """One point of the sales series."""

    date: str
    amount: float
    orders: int


@dataclass(frozen=True)
class UserGrowthPoint:
    """One point of the user growth series."""

    date: str
    users: int
    new_users: int
    total_users: int


@dataclass(frozen=True)
class CategoryDataset:
    """Single chart dataset: values and their slice colors."""

    data: tuple[float, ...]
    background_color: tuple[str, ...]
    border_width: int


@dataclass(frozen=True)
class CategoryDistribution:
    """Category chart data: labels plus one dataset of equal length."""

    labels: tuple[str, ...]
    dataset: CategoryDataset

    def __post_init__(self) -> None:
        if not (
            len(self.labels)
            == len(self.dataset.data)
            == len(self.dataset.background_color)
        ):
            raise ValueError(
                "labels, data and background_color must have the same length"
            )


@dataclass(frozen=True)
class NotificationEvent:
    """User-visible notification handed to the notify callback."""

    severity: Severity
    title: str
    message: str


@dataclass(frozen=True)
class ViewState:
    """Everything the dashboard renders. Replaced wholesale on each change."""

    summary: DashboardSummary | None = None
    sales_series: tuple[SalesPoint, ...] = field(default_factory=tuple)
    user_growth_series: tuple[UserGrowthPoint, ...] = field(default_factory=tuple)
    category_distribution: CategoryDistribution | None = None
    sales_period: str = "month"
    user_growth_period: str = "month"
    is_loading: bool = False
    error: AdminPanelException | None = None
