"""Payload schemas of the remote admin API dashboard endpoints.

The remote API speaks camelCase JSON; these models validate it before the
transform functions map it to application DTOs.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MonthlyGrowthPayload(_CamelModel):
    users: float = 0
    orders: float = 0
    revenue: float = 0


class DashboardStatsPayload(_CamelModel):
    """GET /dashboard/stats."""

    total_users: int = Field(ge=0)
    total_suppliers: int = Field(default=0, ge=0)
    total_orders: int = Field(ge=0)
    total_revenue: float
    pending_verifications: int = Field(default=0, ge=0)
    active_users: int = Field(default=0, ge=0)
    monthly_growth: MonthlyGrowthPayload = Field(default_factory=MonthlyGrowthPayload)


class SalesPointPayload(_CamelModel):
    date: str
    sales: float
    orders: int = 0


class SalesDataPayload(_CamelModel):
    """GET /dashboard/sales?period=..."""

    period: str | None = None
    data: list[SalesPointPayload] = Field(default_factory=list)
    total: float | None = None
    growth: float | None = None


class UserGrowthPointPayload(_CamelModel):
    date: str
    new_users: int = 0
    total_users: int = 0


class UserGrowthPayload(_CamelModel):
    """GET /dashboard/users?period=..."""

    period: str | None = None
    data: list[UserGrowthPointPayload] = Field(default_factory=list)
    growth: float | None = None


class CategoryItemPayload(_CamelModel):
    """One element of GET /dashboard/categories (a JSON array)."""

    category: str
    count: float = Field(ge=0)
    percentage: float | None = None
    revenue: float | None = None
