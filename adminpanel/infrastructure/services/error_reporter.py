"""Default error reporter: structured log line plus span error."""

from __future__ import annotations

from adminpanel.domain.exceptions import AdminPanelException
from adminpanel.shared.telemetry.logging import get_logger
from adminpanel.shared.telemetry.tracing import get_trace_id, set_span_error

logger = get_logger(__name__)


class LoggingErrorReporter:
    """IErrorReporter that writes to the log and marks the active span as failed."""

    def report(self, error: AdminPanelException, context: str) -> None:
        logger.error(
            "[%s] %s (%s) details=%s trace_id=%s",
            context,
            error.message,
            error.error_code,
            error.details,
            get_trace_id(),
        )
        set_span_error(error)
