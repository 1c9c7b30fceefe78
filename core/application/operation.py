"""
Operation boundary.

Lifecycle operations never raise to their caller: expected failures
become a failed ``OperationResult`` carrying the error kind, and
anything unexpected is logged and reported as a generic internal error.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from core.domain.exceptions import DomainException, ErrorKind

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


@dataclass(frozen=True)
class OperationResult:
    """Structured outcome of a lifecycle operation."""

    ok: bool
    data: Any = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""
    error_code: Optional[str] = None

    @classmethod
    def success(cls, data: Any = None, message: str = "") -> "OperationResult":
        return cls(ok=True, data=data, message=message)

    @classmethod
    def failure(
        cls, kind: ErrorKind, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        return cls(ok=False, error_kind=kind, message=message, error_code=error_code)


def run_operation(name: str, func: Callable[[], Any], success_message: str = "") -> OperationResult:
    """
    Execute ``func`` and convert its outcome into an OperationResult.

    Args:
        name: Operation name for logging
        func: Zero-argument callable doing the work
        success_message: Message attached to a successful result

    Returns:
        OperationResult
    """
    try:
        data = func()
    except DomainException as e:
        logger.info(
            "Operation %s failed: %s - %s",
            name,
            e.code,
            e.message,
            extra={"operation": name, "error_kind": e.kind.value},
        )
        return OperationResult.failure(e.kind, e.message, e.code)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error(
            "Unexpected error in operation %s: %s",
            name,
            e,
            exc_info=True,
            extra={"operation": name},
        )
        return OperationResult.failure(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR")
    return OperationResult.success(data, success_message)
