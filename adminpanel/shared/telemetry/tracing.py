"""Span helpers for the dashboard fetch path.

traced() wraps coroutine functions (data source calls) in a span. Only
allowlisted argument names are copied onto the span, whether passed by
position or keyword; failures record the exception and, for
AdminPanelException, its error_code.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these argument names are copied onto spans; anything else may carry secrets.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "period", "force_refresh", "line", "operation_name", "retries",
    "timeout_seconds", "limit",
})


def _safe_arguments(
    signature: inspect.Signature, args: tuple, kwargs: dict[str, Any]
) -> dict[str, str]:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        bound_args = kwargs
    else:
        bound_args = bound.arguments
    return {
        f"arg.{name}": str(value)
        for name, value in bound_args.items()
        if name in _SAFE_SPAN_ATTR_KEYS
    }


def _record_failure(span: trace.Span, exc: Exception) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)
    error_code = getattr(exc, "error_code", None)
    if isinstance(error_code, str):
        span.set_attribute("error.code", error_code)


def traced(
    operation_name: str | None = None,
    attributes: dict[str, str | int | float | bool] | None = None,
) -> Callable:
    """Decorator to run a coroutine function inside a span.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Static attributes set on every span.

    Raises:
        TypeError: The decorated function is not a coroutine function.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced() expects a coroutine function, got {func!r}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                for key, value in (attributes or {}).items():
                    span.set_attribute(key, value)
                for key, value in _safe_arguments(signature, args, kwargs).items():
                    span.set_attribute(key, value)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span when it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def set_span_error(exception: Exception) -> None:
    """Mark the current span as failed and record the exception."""
    span = trace.get_current_span()
    if span.is_recording():
        _record_failure(span, exception)


def get_trace_id() -> str | None:
    """Return the current trace ID as 32-char hex, or None outside a span."""
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.trace_id, "032x")
    return None
