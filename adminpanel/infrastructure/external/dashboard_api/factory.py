"""Dashboard data source factory: creates the HTTP or mock source from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from adminpanel.application.interfaces.services import IDashboardDataSource

if TYPE_CHECKING:
    from adminpanel.core.config import Settings


def create_http_client(settings: "Settings") -> httpx.AsyncClient:
    """Return an AsyncClient bound to the admin API base URL and default timeout."""
    return httpx.AsyncClient(
        base_url=settings.dashboard_api_base_url,
        timeout=settings.dashboard_api_timeout_seconds,
    )


class DashboardSourceFactory:
    """Factory for dashboard data sources based on configuration."""

    @staticmethod
    def create_data_source(
        settings: "Settings | None" = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> IDashboardDataSource:
        """Create the data source selected by settings.dashboard_data_source.

        Args:
            settings: Application settings; if None, uses get_settings().
            http_client: Shared AsyncClient; required for the "http" source.

        Returns:
            DashboardApiClient or MockDashboardSource.

        Raises:
            ValueError: Unknown source or missing HTTP client.
        """
        from adminpanel.core.config import get_settings

        s = settings or get_settings()
        source = s.dashboard_data_source.lower()

        if source == "mock":
            from adminpanel.infrastructure.external.dashboard_api.mock_source import (
                MockDashboardSource,
            )

            return MockDashboardSource()
        if source == "http":
            from adminpanel.infrastructure.external.dashboard_api.client import (
                DashboardApiClient,
            )

            if http_client is None:
                raise ValueError("http_client required for the http data source")
            token = (
                s.dashboard_api_token.get_secret_value()
                if s.dashboard_api_token
                else None
            )
            return DashboardApiClient(http_client, access_token=token)
        raise ValueError(
            f"Unknown dashboard data source: {source}. Supported: 'http', 'mock'"
        )
