"""Dashboard API: ViewState projection, per-line fetches and manual refresh."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from adminpanel.api.v1.dependencies import get_orchestrator
from adminpanel.application.services.dashboard_orchestrator import DashboardOrchestrator
from adminpanel.schemas.dashboard import (
    CategoryDistributionResponse,
    DashboardSummaryResponse,
    DashboardViewResponse,
    ErrorInfo,
    RefreshResponse,
    SalesPointResponse,
    UserGrowthPointResponse,
    sales_points,
    user_growth_points,
)

router = APIRouter()

Orchestrator = Annotated[DashboardOrchestrator, Depends(get_orchestrator)]


@router.get("", response_model=DashboardViewResponse)
async def get_dashboard(orchestrator: Orchestrator) -> DashboardViewResponse:
    """Return the current dashboard view without fetching anything."""
    return DashboardViewResponse.from_state(
        orchestrator.state, orchestrator.summary_cache_age()
    )


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_summary(
    orchestrator: Orchestrator,
    force_refresh: Annotated[bool, Query()] = False,
) -> DashboardSummaryResponse:
    """Return summary stats; served from the 5-minute cache unless force_refresh."""
    summary = await orchestrator.fetch_summary(force_refresh=force_refresh)
    return DashboardSummaryResponse.from_dto(summary)


@router.get("/sales", response_model=list[SalesPointResponse])
async def get_sales(
    orchestrator: Orchestrator,
    period: Annotated[str, Query()] = "month",
) -> list[SalesPointResponse]:
    """Fetch the sales series (day, week, month or year)."""
    return sales_points(await orchestrator.fetch_sales_series(period))


@router.get("/user-growth", response_model=list[UserGrowthPointResponse])
async def get_user_growth(
    orchestrator: Orchestrator,
    period: Annotated[str, Query()] = "month",
) -> list[UserGrowthPointResponse]:
    """Fetch the user growth series (week, month or year)."""
    return user_growth_points(await orchestrator.fetch_user_growth_series(period))


@router.get("/categories", response_model=CategoryDistributionResponse)
async def get_categories(orchestrator: Orchestrator) -> CategoryDistributionResponse:
    """Fetch the category distribution with chart colors."""
    dist = await orchestrator.fetch_category_distribution()
    return CategoryDistributionResponse.from_dto(dist)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_dashboard(orchestrator: Orchestrator) -> RefreshResponse:
    """Refresh every line with retry and timeout. Always 200; check success."""
    result = await orchestrator.manual_refresh()
    return RefreshResponse(
        success=result.success,
        attempts=result.attempts,
        error=ErrorInfo.from_exception(result.error) if result.error else None,
        dashboard=DashboardViewResponse.from_state(
            orchestrator.state, orchestrator.summary_cache_age()
        ),
    )
