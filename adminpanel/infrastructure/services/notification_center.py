"""In-memory notification sink.

Keeps the most recent notification events for the UI to poll
(GET /api/v1/notifications) and logs each one. Bounded: the oldest events
drop out once history_size is reached.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone

from adminpanel.application.dtos.dashboard import NotificationEvent
from adminpanel.domain.enums import Severity
from adminpanel.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
}


@dataclass(frozen=True)
class StoredNotification:
    """Notification event with the time it was received."""

    event: NotificationEvent
    received_at: datetime


class NotificationCenter:
    """Callable sink: pass the instance wherever a NotifyCallback is expected."""

    def __init__(self, history_size: int = 50) -> None:
        self._history: deque[StoredNotification] = deque(maxlen=history_size)

    def __call__(self, event: NotificationEvent) -> None:
        self._history.append(
            StoredNotification(event=event, received_at=datetime.now(timezone.utc))
        )
        logger.log(
            _LOG_LEVELS.get(event.severity, logging.INFO),
            "Notification [%s] %s: %s",
            event.severity.value,
            event.title,
            event.message,
        )

    def recent(self, limit: int | None = None) -> list[StoredNotification]:
        """Return stored notifications, newest first."""
        items = list(reversed(self._history))
        return items if limit is None else items[:limit]

    def clear(self) -> None:
        self._history.clear()
