"""Domain exceptions for the admin panel.

Every failure that reaches ViewState, the notifier or an HTTP response is
an AdminPanelException: a human-readable message, a machine-readable
error_code and a details dict. The presentation layer maps error codes to
HTTP statuses in exception handlers.
"""

from typing import Any


class AdminPanelException(Exception):
    """Base exception for all admin panel errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. status_code, operation).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AdminPanelException):
    """Raised when an argument is outside its allowed set (e.g. unknown period)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class TransportError(AdminPanelException):
    """The data source request failed (network error or non-success HTTP status)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        super().__init__(message, "TRANSPORT_ERROR", details)
        self.status_code = status_code


class EmptyResponseError(AdminPanelException):
    """The data source answered without a payload."""

    def __init__(self, resource: str) -> None:
        super().__init__(
            f"No {resource} received",
            "EMPTY_RESPONSE",
            {"resource": resource},
        )


class InvalidResponseError(AdminPanelException):
    """The data source payload did not match the expected shape."""

    def __init__(self, resource: str, reason: str) -> None:
        super().__init__(
            f"Invalid {resource} received",
            "INVALID_RESPONSE",
            {"resource": resource, "reason": reason},
        )


class OperationTimeoutError(AdminPanelException):
    """An attempt did not finish before the retry wrapper's deadline."""

    def __init__(self, operation_name: str, timeout_seconds: float) -> None:
        super().__init__(
            f"{operation_name} timed out after {timeout_seconds:g} seconds",
            "TIMEOUT",
            {"operation": operation_name, "timeout_seconds": timeout_seconds},
        )
        self.operation_name = operation_name
        self.timeout_seconds = timeout_seconds


class RetryExhaustedError(AdminPanelException):
    """Every attempt of a retried operation failed."""

    def __init__(
        self,
        operation_name: str,
        attempts: int,
        last_error: AdminPanelException,
    ) -> None:
        super().__init__(
            f"{operation_name} failed after {attempts} attempt(s): {last_error.message}",
            "RETRY_EXHAUSTED",
            {
                "operation": operation_name,
                "attempts": attempts,
                "last_error": last_error.error_code,
            },
        )
        self.last_error = last_error
