"""
API exception handlers.

Errors raised outside the lifecycle service (authentication, request
parsing, unknown routes) are rendered with the same error body the
views use for failed operations.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from api.responses import STATUS_BY_KIND, error_body
from core.application.operation import INTERNAL_ERROR_MESSAGE
from core.domain.exceptions import DomainException, ErrorKind

logger = logging.getLogger(__name__)

KIND_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.INVALID_INPUT,
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorKind.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorKind.CONFLICT,
}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, (exceptions.APIException, Http404)):
        response = _handle_api_exception(exc, context)
    else:
        response = _handle_unexpected_exception(exc, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", None) or getattr(request, "correlation_id", None)


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain exceptions that escaped a view."""
    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.kind, exc.message, exc.code), status=STATUS_BY_KIND[exc.kind])


def _handle_api_exception(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render DRF and Django HTTP errors with the shared error body."""
    response = exception_handler(exc, context)
    kind = KIND_BY_STATUS.get(response.status_code, ErrorKind.INVALID_INPUT)
    if isinstance(exc, Http404):
        message, code = "Resource not found", "NOT_FOUND"
    else:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        message = str(detail or exc.default_detail)
        code = exc.default_code.upper().replace("-", "_")
    response.data = error_body(kind, message, code)
    return response


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
