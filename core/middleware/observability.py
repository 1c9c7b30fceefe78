"""
Observability middleware.

Assigns a correlation id to every request and writes one structured
log line when the request starts and one when it finishes.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
TRACE_HEADER = "X-Trace-ID"


def _current_trace_id() -> Optional[str]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format_trace_id(span_context.trace_id)


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Generates correlation IDs for request tracing
    2. Logs request/response information with duration
    3. Adds correlation and trace IDs to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore[attr-defined]

        trace_id = _current_trace_id()
        request.trace_id = trace_id  # type: ignore[attr-defined]

        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        if trace_id:
            log_extra["trace_id"] = trace_id
            log_extra["span_id"] = format_span_id(
                trace.get_current_span().get_span_context().span_id
            )

        logger.info("Request started", extra=log_extra)
        start_time = time.monotonic()

        try:
            response = self.get_response(request)
        except Exception:
            logger.error(
                "Request failed",
                extra={**log_extra, "duration_ms": self._elapsed_ms(start_time)},
                exc_info=True,
            )
            raise

        logger.info(
            "Request finished",
            extra={
                **log_extra,
                "status_code": response.status_code,
                "duration_ms": self._elapsed_ms(start_time),
            },
        )
        response[CORRELATION_HEADER] = correlation_id
        if trace_id:
            response[TRACE_HEADER] = trace_id
        return response

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.monotonic() - start_time) * 1000, 2)
