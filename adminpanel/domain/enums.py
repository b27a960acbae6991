"""Domain enumerations for the admin panel dashboard.

Enums represent fixed sets of domain values (periods, request lines,
notification severities).
"""

from enum import Enum


class SalesPeriod(str, Enum):
    """Aggregation window accepted by the sales series endpoint."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid period values as strings."""
        return [period.value for period in cls]


class GrowthPeriod(str, Enum):
    """Aggregation window accepted by the user growth endpoint."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid period values as strings."""
        return [period.value for period in cls]


class RequestLine(str, Enum):
    """One of the independent dashboard fetch paths."""

    SUMMARY = "summary"
    SALES = "sales"
    USER_GROWTH = "user_growth"
    CATEGORY = "category"


class Severity(str, Enum):
    """Notification severity shown by the toast layer."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
