"""In-memory dashboard data source for local development and demos.

Serves fixed payloads shaped exactly like the remote admin API and runs
them through the same transforms, so the rest of the stack cannot tell the
difference. Optional latency simulates network delay.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any

from adminpanel.application.dtos.dashboard import (
    CategoryDistribution,
    DashboardSummary,
    SalesPoint,
    UserGrowthPoint,
)
from adminpanel.infrastructure.external.dashboard_api.transformers import (
    to_category_distribution,
    to_dashboard_summary,
    to_sales_series,
    to_user_growth_series,
)

MOCK_STATS: dict[str, Any] = {
    "totalUsers": 1234,
    "totalSuppliers": 56,
    "totalOrders": 789,
    "totalRevenue": 123456.78,
    "pendingVerifications": 12,
    "activeUsers": 987,
    "monthlyGrowth": {"users": 4.2, "orders": -1.5, "revenue": 7.9},
}

MOCK_SALES: dict[str, list[dict[str, Any]]] = {
    "day": [
        {"date": "2024-06-30T09:00", "sales": 400, "orders": 2},
        {"date": "2024-06-30T13:00", "sales": 1250, "orders": 5},
        {"date": "2024-06-30T17:00", "sales": 980, "orders": 3},
    ],
    "week": [
        {"date": "2024-06-24", "sales": 2100, "orders": 9},
        {"date": "2024-06-25", "sales": 1800, "orders": 7},
        {"date": "2024-06-26", "sales": 2500, "orders": 11},
        {"date": "2024-06-27", "sales": 1950, "orders": 8},
        {"date": "2024-06-28", "sales": 3200, "orders": 14},
    ],
    "month": [
        {"date": "2024-01", "sales": 12000, "orders": 51},
        {"date": "2024-02", "sales": 19000, "orders": 77},
        {"date": "2024-03", "sales": 15000, "orders": 63},
        {"date": "2024-04", "sales": 25000, "orders": 98},
        {"date": "2024-05", "sales": 22000, "orders": 90},
        {"date": "2024-06", "sales": 30000, "orders": 121},
    ],
    "year": [
        {"date": "2022", "sales": 154000, "orders": 640},
        {"date": "2023", "sales": 198000, "orders": 811},
        {"date": "2024", "sales": 123000, "orders": 500},
    ],
}

MOCK_USER_GROWTH: dict[str, list[dict[str, Any]]] = {
    "week": [
        {"date": "2024-06-24", "newUsers": 12, "totalUsers": 1180},
        {"date": "2024-06-25", "newUsers": 9, "totalUsers": 1189},
        {"date": "2024-06-26", "newUsers": 15, "totalUsers": 1204},
        {"date": "2024-06-27", "newUsers": 30, "totalUsers": 1234},
    ],
    "month": [
        {"date": "2024-01", "newUsers": 65, "totalUsers": 780},
        {"date": "2024-02", "newUsers": 78, "totalUsers": 858},
        {"date": "2024-03", "newUsers": 90, "totalUsers": 948},
        {"date": "2024-04", "newUsers": 81, "totalUsers": 1029},
        {"date": "2024-05", "newUsers": 95, "totalUsers": 1124},
        {"date": "2024-06", "newUsers": 110, "totalUsers": 1234},
    ],
    "year": [
        {"date": "2022", "newUsers": 420, "totalUsers": 420},
        {"date": "2023", "newUsers": 295, "totalUsers": 715},
        {"date": "2024", "newUsers": 519, "totalUsers": 1234},
    ],
}

MOCK_CATEGORIES: list[dict[str, Any]] = [
    {"category": "Electronics", "count": 30, "percentage": 30.0, "revenue": 45000},
    {"category": "Clothing", "count": 25, "percentage": 25.0, "revenue": 21000},
    {"category": "Food", "count": 20, "percentage": 20.0, "revenue": 9800},
    {"category": "Furniture", "count": 15, "percentage": 15.0, "revenue": 31000},
    {"category": "Office Supplies", "count": 10, "percentage": 10.0, "revenue": 4200},
]


class MockDashboardSource:
    """IDashboardDataSource backed by the fixtures above."""

    def __init__(self, latency_seconds: float = 0.0) -> None:
        self.latency_seconds = latency_seconds

    async def _respond(self, payload: Any) -> Any:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)
        return copy.deepcopy(payload)

    async def get_summary(self) -> DashboardSummary:
        return to_dashboard_summary(await self._respond(MOCK_STATS))

    async def get_sales_series(self, period: str) -> list[SalesPoint]:
        payload = {"period": period, "data": MOCK_SALES.get(period, [])}
        return to_sales_series(await self._respond(payload), period)

    async def get_user_growth_series(self, period: str) -> list[UserGrowthPoint]:
        payload = {"period": period, "data": MOCK_USER_GROWTH.get(period, [])}
        return to_user_growth_series(await self._respond(payload), period)

    async def get_category_distribution(self) -> CategoryDistribution:
        return to_category_distribution(await self._respond(MOCK_CATEGORIES))
