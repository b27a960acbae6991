"""Health check endpoint. Used for liveness and readiness probes."""

from fastapi import APIRouter, Request

from adminpanel.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(request: Request) -> ReadinessResponse:
    """Report whether the initial dashboard load has finished (success or not)."""
    task = getattr(request.app.state, "initial_load_task", None)
    return ReadinessResponse(initial_load_complete=task is not None and task.done())
