"""Notifications API: recent toast events for the UI to display."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from adminpanel.api.v1.dependencies import get_notification_center
from adminpanel.infrastructure.services.notification_center import NotificationCenter
from adminpanel.schemas.notification import NotificationItem

router = APIRouter()


@router.get("", response_model=list[NotificationItem])
def list_notifications(
    center: Annotated[NotificationCenter, Depends(get_notification_center)],
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
) -> list[NotificationItem]:
    """Return stored notifications, newest first."""
    return [
        NotificationItem(
            severity=item.event.severity,
            title=item.event.title,
            message=item.event.message,
            received_at=item.received_at,
        )
        for item in center.recent(limit)
    ]


@router.delete("", status_code=204)
def clear_notifications(
    center: Annotated[NotificationCenter, Depends(get_notification_center)],
) -> None:
    """Dismiss all stored notifications."""
    center.clear()
