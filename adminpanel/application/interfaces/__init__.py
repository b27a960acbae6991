"""Application interfaces (ports): service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from adminpanel.infrastructure or adminpanel.api.
"""

from adminpanel.application.interfaces.services import (
    IDashboardDataSource,
    IErrorReporter,
    NotifyCallback,
)

__all__ = [
    "IDashboardDataSource",
    "IErrorReporter",
    "NotifyCallback",
]
