"""External integrations: dashboard data sources."""
