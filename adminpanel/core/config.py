"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every setting has a default so the service boots against the mock data
    source with no environment at all. validate_dashboard checks ranges and
    the data source selector.
    """

    # App
    app_name: str = "adminpanel"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Dashboard data source: "http" (remote admin API) or "mock" (in-memory fixtures)
    dashboard_data_source: str = "mock"
    dashboard_api_base_url: str = "https://api.connectchain.com"
    dashboard_api_token: SecretStr | None = None
    # Transport default for background fetches; the manual refresh has its own deadline.
    dashboard_api_timeout_seconds: float = 30.0

    # Summary cache
    dashboard_cache_ttl_seconds: float = 300.0

    # Manual refresh (retry/timeout wrapper)
    refresh_timeout_seconds: float = 10.0
    refresh_retries: int = 2

    # Notification center: how many recent events GET /notifications returns
    notification_history_size: int = 50

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_dashboard(self) -> "Settings":
        """Validate data source selector, TTL and retry budget."""
        if self.dashboard_data_source not in ("http", "mock"):
            raise ValueError(
                "dashboard_data_source must be 'http' or 'mock', "
                f"got: {self.dashboard_data_source!r}"
            )
        if self.dashboard_data_source == "http" and not self.dashboard_api_base_url:
            raise ValueError(
                "DASHBOARD_API_BASE_URL is required when dashboard_data_source is 'http'."
            )
        if self.dashboard_cache_ttl_seconds <= 0:
            raise ValueError("DASHBOARD_CACHE_TTL_SECONDS must be positive.")
        if self.refresh_timeout_seconds <= 0:
            raise ValueError("REFRESH_TIMEOUT_SECONDS must be positive.")
        if self.refresh_retries < 0:
            raise ValueError("REFRESH_RETRIES must be zero or greater.")
        if self.notification_history_size < 1:
            raise ValueError("NOTIFICATION_HISTORY_SIZE must be at least 1.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
