"""Span helpers for upload operations.

traced() opens one span per awaited call and tags it from the UploadRequest
argument. Only routing fields are recorded; bodies, metadata values and
credentials never reach span attributes.
"""

import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from objectstore.application.dtos.upload import UploadRequest

T = TypeVar("T")


def request_span_attributes(request: UploadRequest) -> dict[str, str | int]:
    """Span attributes describing an upload request (no body, no metadata values)."""
    attributes: dict[str, str | int] = {"storage.key": request.key}
    if request.content_type:
        attributes["storage.content_type"] = request.content_type
    if request.cache_control:
        attributes["storage.cache_control"] = request.cache_control
    if request.metadata:
        attributes["storage.metadata_count"] = len(request.metadata)
    return attributes


def _find_request(args: tuple[Any, ...], kwargs: dict[str, Any]) -> UploadRequest | None:
    for value in (*args, *kwargs.values()):
        if isinstance(value, UploadRequest):
            return value
    return None


def traced(
    operation_name: str | None = None,
    attributes: dict[str, str | int | float | bool] | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that runs a coroutine function inside a span.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Static attributes set on every span.

    Returns:
        Decorated coroutine function. The span is marked ERROR and records
        the exception when the call raises.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced() needs a coroutine function, got {func.__qualname__}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with tracer.start_as_current_span(span_name) as span:
                if attributes:
                    span.set_attributes(attributes)
                request = _find_request(args, kwargs)
                if request is not None:
                    span.set_attributes(request_span_attributes(request))
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, attributes: dict | None = None) -> None:
    """Add an event to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})
