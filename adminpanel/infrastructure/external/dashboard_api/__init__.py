"""Dashboard data sources: remote admin REST API and in-memory fixtures.

Factory creates the source from adminpanel.core.config. Both sources
implement IDashboardDataSource and share the payload transforms.
"""

from adminpanel.infrastructure.external.dashboard_api.client import DashboardApiClient
from adminpanel.infrastructure.external.dashboard_api.factory import (
    DashboardSourceFactory,
    create_http_client,
)
from adminpanel.infrastructure.external.dashboard_api.mock_source import (
    MockDashboardSource,
)

__all__ = [
    "DashboardApiClient",
    "DashboardSourceFactory",
    "MockDashboardSource",
    "create_http_client",
]
