"""
Coercion of loosely typed request values.
"""
from typing import Any

from core.domain.exceptions import InvalidInputError


def parse_identifier(value: Any, field: str = "id") -> int:
    """
    Convert a path or body value to a positive integer id.

    Raises:
        InvalidInputError: If the value is missing or not a positive integer
    """
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError(f"{field} is required", code="MISSING_FIELD")
    try:
        identifier = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{field} must be an integer") from e
    if identifier < 1:
        raise InvalidInputError(f"{field} must be a positive integer")
    return identifier


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
