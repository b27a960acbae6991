"""Application services: the dashboard fetch orchestrator."""

from adminpanel.application.services.dashboard_orchestrator import DashboardOrchestrator

__all__ = ["DashboardOrchestrator"]
