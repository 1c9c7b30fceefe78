"""
Mapping from operation results to HTTP responses.
"""
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response

from core.application.operation import OperationResult
from core.domain.exceptions import ErrorKind

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.EXHAUSTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(kind: ErrorKind, message: str, code: Optional[str] = None) -> Dict[str, Any]:
    """Build the error payload shared by every endpoint."""
    return {
        "status": False,
        "error": {"code": code or kind.value, "kind": kind.value, "message": message},
        "message": message,
    }


def error_response(result: OperationResult) -> Response:
    """
    Convert a failed OperationResult into a Response.

    Args:
        result: Failed operation result

    Returns:
        Response with the status code for the result's error kind
    """
    kind = result.error_kind or ErrorKind.INTERNAL
    return Response(
        error_body(kind, result.message, result.error_code),
        status=STATUS_BY_KIND[kind],
    )


def validation_error_response(errors: Dict[str, Any]) -> Response:
    """Response for a request body that failed serializer validation."""
    body = error_body(ErrorKind.INVALID_INPUT, "Invalid request", "VALIDATION_ERROR")
    body["error"]["details"] = errors
    return Response(body, status=status.HTTP_400_BAD_REQUEST)
