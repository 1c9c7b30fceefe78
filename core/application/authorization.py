"""
Capability checks shared by the lifecycle handlers.
"""
from typing import Optional

from core.domain.exceptions import ForbiddenError, UnauthorizedError
from core.domain.value_objects import CallerContext


def require_authenticated(caller: Optional[CallerContext]) -> CallerContext:
    """
    Ensure the caller carries an identity.

    Raises:
        UnauthorizedError: If there is no caller or no email claim
    """
    if caller is None or not caller.is_authenticated:
        raise UnauthorizedError()
    return caller


def require_superadmin(caller: Optional[CallerContext]) -> CallerContext:
    """
    Ensure the caller is an authenticated superadmin.

    Raises:
        UnauthorizedError: If there is no usable identity
        ForbiddenError: If the identity has another role
    """
    caller = require_authenticated(caller)
    if not caller.is_superadmin:
        raise ForbiddenError()
    return caller
