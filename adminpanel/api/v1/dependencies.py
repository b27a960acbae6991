"""Presentation-layer dependency injection.

The orchestrator and notification center are built once in the app
lifespan and stored on app.state; routes receive them through Depends()
and never touch infrastructure directly.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from adminpanel.application.services.dashboard_orchestrator import DashboardOrchestrator
from adminpanel.infrastructure.services.notification_center import NotificationCenter


def get_orchestrator(request: Request) -> DashboardOrchestrator:
    """Dashboard orchestrator created at startup (composition root)."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Dashboard is not initialized")
    return orchestrator


def get_notification_center(request: Request) -> NotificationCenter:
    """Notification sink created at startup (composition root)."""
    center = getattr(request.app.state, "notification_center", None)
    if center is None:
        raise HTTPException(status_code=503, detail="Notifications are not initialized")
    return center
