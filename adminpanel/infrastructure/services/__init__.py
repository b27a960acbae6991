"""Infrastructure services: notification sink and error reporter."""

from adminpanel.infrastructure.services.error_reporter import LoggingErrorReporter
from adminpanel.infrastructure.services.notification_center import (
    NotificationCenter,
    StoredNotification,
)

__all__ = [
    "LoggingErrorReporter",
    "NotificationCenter",
    "StoredNotification",
]
