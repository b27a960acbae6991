"""Core constants: dashboard endpoints, chart palette and shared literal values."""

# Remote admin API paths (relative to dashboard_api_base_url)
DASHBOARD_STATS_PATH = "/dashboard/stats"
DASHBOARD_SALES_PATH = "/dashboard/sales"
DASHBOARD_USERS_PATH = "/dashboard/users"
DASHBOARD_CATEGORIES_PATH = "/dashboard/categories"

# Category chart colors, assigned by cyclic index
CATEGORY_PALETTE: tuple[str, ...] = (
    "#F28B22",
    "#10B981",
    "#3B82F6",
    "#8B5CF6",
    "#EC4899",
    "#F59E0B",
    "#EF4444",
    "#6366F1",
)
CATEGORY_BORDER_WIDTH = 1

# Summary cache TTL when no setting overrides it (5 minutes)
DEFAULT_SUMMARY_TTL_SECONDS = 300.0

REFRESH_OPERATION_NAME = "Refresh Dashboard"
