"""Notification API schemas."""

from datetime import datetime

from pydantic import BaseModel

from adminpanel.domain.enums import Severity


class NotificationItem(BaseModel):
    """One stored toast event."""

    severity: Severity
    title: str
    message: str
    received_at: datetime
