"""Error normalization helpers.

Turns arbitrary exceptions into AdminPanelException so ViewState, the
notifier and HTTP responses only ever see one error shape.
"""

from adminpanel.domain.exceptions import AdminPanelException

UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred."

_STATUS_MESSAGES: dict[int, str] = {
    400: "Bad request. Please check your input.",
    401: "Unauthorized. Please log in again.",
    403: "Forbidden. You do not have permission to access this resource.",
    404: "Resource not found.",
    409: "Conflict. The resource already exists or has been modified.",
    422: "Validation error. Please check your input.",
    429: "Too many requests. Please try again later.",
    500: "Internal server error. Please try again later.",
    502: "Bad gateway. Please try again later.",
    503: "Service unavailable. Please try again later.",
    504: "Gateway timeout. Please try again later.",
}


def http_status_message(status_code: int) -> str:
    """Return the user-facing message for an HTTP status code."""
    return _STATUS_MESSAGES.get(status_code, UNKNOWN_ERROR_MESSAGE)


def normalize_error(exc: BaseException) -> AdminPanelException:
    """Return exc if it is already an AdminPanelException, else wrap it.

    The wrapper keeps the original text when there is one and records the
    original type in details.
    """
    if isinstance(exc, AdminPanelException):
        return exc
    message = str(exc) or UNKNOWN_ERROR_MESSAGE
    return AdminPanelException(
        message,
        "UNKNOWN_ERROR",
        {"type": type(exc).__name__},
    )
