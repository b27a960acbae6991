"""Pure transforms from remote payloads to dashboard DTOs.

Each function validates the raw JSON with the payload schemas and maps it
to application dataclasses. Validation failures become InvalidResponseError;
a missing payload becomes EmptyResponseError.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from adminpanel.application.dtos.dashboard import (
    CategoryDataset,
    CategoryDistribution,
    DashboardSummary,
    MonthlyGrowth,
    SalesPoint,
    UserGrowthPoint,
)
from adminpanel.core.constants import CATEGORY_BORDER_WIDTH, CATEGORY_PALETTE
from adminpanel.domain.exceptions import EmptyResponseError, InvalidResponseError
from adminpanel.schemas.dashboard_source import (
    CategoryItemPayload,
    DashboardStatsPayload,
    SalesDataPayload,
    UserGrowthPayload,
)

_category_list_adapter = TypeAdapter(list[CategoryItemPayload])


def _require(raw: Any, resource: str) -> Any:
    if raw is None or raw == "":
        raise EmptyResponseError(resource)
    return raw


def palette_colors(count: int, palette: Sequence[str] = CATEGORY_PALETTE) -> tuple[str, ...]:
    """Return count colors picked by cyclic index into palette.

    Same count and palette always give the same tuple.
    """
    if not palette:
        raise ValueError("palette must not be empty")
    return tuple(palette[i % len(palette)] for i in range(count))


def to_dashboard_summary(raw: Any) -> DashboardSummary:
    """Map GET /dashboard/stats JSON to DashboardSummary."""
    resource = "dashboard statistics"
    try:
        payload = DashboardStatsPayload.model_validate(_require(raw, resource))
    except ValidationError as e:
        raise InvalidResponseError(resource, str(e)) from e
    growth = payload.monthly_growth
    return DashboardSummary(
        total_users=payload.total_users,
        total_suppliers=payload.total_suppliers,
        total_orders=payload.total_orders,
        total_revenue=payload.total_revenue,
        pending_verifications=payload.pending_verifications,
        active_users=payload.active_users,
        monthly_growth=MonthlyGrowth(
            users=growth.users,
            orders=growth.orders,
            revenue=growth.revenue,
        ),
    )


def to_sales_series(raw: Any, period: str) -> list[SalesPoint]:
    """Map GET /dashboard/sales JSON to sales points, keeping source order."""
    resource = f"sales data for period: {period}"
    try:
        payload = SalesDataPayload.model_validate(_require(raw, resource))
    except ValidationError as e:
        raise InvalidResponseError(resource, str(e)) from e
    return [
        SalesPoint(date=p.date, amount=p.sales, orders=p.orders)
        for p in payload.data
    ]


def to_user_growth_series(raw: Any, period: str) -> list[UserGrowthPoint]:
    """Map GET /dashboard/users JSON to growth points; users is the running total."""
    resource = f"user growth data for period: {period}"
    try:
        payload = UserGrowthPayload.model_validate(_require(raw, resource))
    except ValidationError as e:
        raise InvalidResponseError(resource, str(e)) from e
    return [
        UserGrowthPoint(
            date=p.date,
            users=p.total_users,
            new_users=p.new_users,
            total_users=p.total_users,
        )
        for p in payload.data
    ]


def to_category_distribution(
    raw: Any,
    palette: Sequence[str] = CATEGORY_PALETTE,
) -> CategoryDistribution:
    """Map GET /dashboard/categories JSON (array) to chart labels, counts and colors."""
    resource = "category distribution data"
    if raw is None:
        raise EmptyResponseError(resource)
    try:
        items = _category_list_adapter.validate_python(raw)
    except ValidationError as e:
        raise InvalidResponseError(resource, str(e)) from e
    return CategoryDistribution(
        labels=tuple(item.category for item in items),
        dataset=CategoryDataset(
            data=tuple(item.count for item in items),
            background_color=palette_colors(len(items), palette),
            border_width=CATEGORY_BORDER_WIDTH,
        ),
    )
