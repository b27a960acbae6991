"""Admin panel backend: dashboard data orchestration behind a FastAPI surface."""

__version__ = "1.0.0"
