"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from adminpanel.domain.enums import GrowthPeriod, RequestLine, SalesPeriod, Severity
from adminpanel.domain.exceptions import (
    AdminPanelException,
    EmptyResponseError,
    InvalidResponseError,
    OperationTimeoutError,
    RetryExhaustedError,
    TransportError,
    ValidationException,
)

__all__ = [
    # Enums
    "GrowthPeriod",
    "RequestLine",
    "SalesPeriod",
    "Severity",
    # Exceptions
    "AdminPanelException",
    "EmptyResponseError",
    "InvalidResponseError",
    "OperationTimeoutError",
    "RetryExhaustedError",
    "TransportError",
    "ValidationException",
]
