"""
Shared pieces of the v1 views.
"""

from typing import Any, Optional

from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.views import APIView

from api.v1.licenses.serializers import ErrorResponseSerializer
from core.application.operation import OperationResult
from core.domain.value_objects import CallerContext
from core.instrumentation import Status, StatusCode

ERROR_RESPONSES = {
    400: ErrorResponseSerializer,
    401: ErrorResponseSerializer,
    403: ErrorResponseSerializer,
    404: ErrorResponseSerializer,
    409: ErrorResponseSerializer,
    500: ErrorResponseSerializer,
}


def get_caller(request: Request) -> Optional[CallerContext]:
    """Return the caller resolved by authentication, if any."""
    user = request.user
    return user if isinstance(user, CallerContext) else None


def body_value(request: Request, name: str) -> Any:
    """Read a raw field from the request body; non-object bodies have no fields."""
    data = request.data
    return data.get(name) if hasattr(data, "get") else None


def record_result(span, result: OperationResult) -> None:
    """Set span status and attributes from an operation result."""
    if result.ok:
        span.set_status(Status(StatusCode.OK))
        return
    span.set_attribute("error", str(result.error_kind))
    span.set_attribute("error.code", result.error_code or "")
    span.set_status(Status(StatusCode.ERROR, result.message))


class ServiceView(APIView):
    """
    Base view for endpoints backed by the lifecycle service.

    Access rules live in the service, so views accept anonymous requests
    and let the service answer Unauthorized or Forbidden.
    """

    permission_classes = [AllowAny]

    def trace_caller(self, span, caller: Optional[CallerContext]) -> None:
        span.set_attribute("caller.role", str(caller.role) if caller else "anonymous")
        if caller and caller.user_id is not None:
            span.set_attribute("caller.user_id", caller.user_id)
