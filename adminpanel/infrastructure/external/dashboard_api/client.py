"""Dashboard data source over the remote admin REST API.

All HTTP calls use httpx.AsyncClient so they do not block the event loop.
The client is created and closed by the app lifespan; this class only
borrows it. Each fetch returns transformed DTOs or raises an
AdminPanelException (TransportError, EmptyResponseError,
InvalidResponseError).
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from adminpanel.application.dtos.dashboard import (
    CategoryDistribution,
    DashboardSummary,
    SalesPoint,
    UserGrowthPoint,
)
from adminpanel.core.constants import (
    DASHBOARD_CATEGORIES_PATH,
    DASHBOARD_SALES_PATH,
    DASHBOARD_STATS_PATH,
    DASHBOARD_USERS_PATH,
)
from adminpanel.domain.exceptions import TransportError
from adminpanel.infrastructure.external.dashboard_api.transformers import (
    to_category_distribution,
    to_dashboard_summary,
    to_sales_series,
    to_user_growth_series,
)
from adminpanel.shared.errors import http_status_message
from adminpanel.shared.telemetry.logging import get_logger
from adminpanel.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


async def _get_json(
    client: httpx.AsyncClient,
    path: str,
    params: dict[str, str] | None = None,
    access_token: str | None = None,
) -> Any:
    """GET path and decode JSON. Empty body returns None."""
    headers = {"Accept": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    try:
        resp = await client.get(path, params=params, headers=headers)
    except httpx.TimeoutException as e:
        raise TransportError(
            "Request timed out. Please try again later.", url=path
        ) from e
    except httpx.HTTPError as e:
        raise TransportError(
            "Network error. Please check your internet connection.", url=path
        ) from e
    add_span_attributes(dashboard_path=path, status_code=resp.status_code)
    if resp.status_code >= 400:
        raise TransportError(
            _error_message(resp), status_code=resp.status_code, url=path
        )
    raw = resp.content
    if not raw:
        return None
    try:
        return json.loads(raw.decode())
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TransportError(
            "Malformed JSON in response", status_code=resp.status_code, url=path
        ) from e


def _error_message(resp: httpx.Response) -> str:
    """Prefer the server's message field; fall back to the status table."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return http_status_message(resp.status_code)


class DashboardApiClient:
    """IDashboardDataSource over the remote admin API.

    Usage:
        async with httpx.AsyncClient(base_url=url) as http:
            source = DashboardApiClient(http)
            summary = await source.get_summary()
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        access_token: str | None = None,
    ) -> None:
        self._http = http_client
        self._access_token = access_token

    async def _fetch(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            return await _get_json(
                self._http, path, params=params, access_token=self._access_token
            )
        except TransportError as e:
            logger.error("Error fetching %s: %s", path, e.message)
            raise

    @traced("dashboard_api.get_summary")
    async def get_summary(self) -> DashboardSummary:
        raw = await self._fetch(DASHBOARD_STATS_PATH)
        return to_dashboard_summary(raw)

    @traced("dashboard_api.get_sales_series")
    async def get_sales_series(self, period: str) -> list[SalesPoint]:
        raw = await self._fetch(DASHBOARD_SALES_PATH, params={"period": period})
        return to_sales_series(raw, period)

    @traced("dashboard_api.get_user_growth_series")
    async def get_user_growth_series(self, period: str) -> list[UserGrowthPoint]:
        raw = await self._fetch(DASHBOARD_USERS_PATH, params={"period": period})
        return to_user_growth_series(raw, period)

    @traced("dashboard_api.get_category_distribution")
    async def get_category_distribution(self) -> CategoryDistribution:
        raw = await self._fetch(DASHBOARD_CATEGORIES_PATH)
        return to_category_distribution(raw)
