"""
Bearer token authentication.

Verifies the JWT in the Authorization header and resolves it into a
CallerContext once per request. Requests without a token pass through
unauthenticated; the lifecycle service decides whether that is allowed.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import jwt
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.request import Request

from api.dependencies import get_licensing_config
from core.config import LicensingConfig
from core.domain.value_objects import CallerContext, UserRole

logger = logging.getLogger(__name__)

KEYWORD = "Bearer"


class JWTAuthentication(BaseAuthentication):
    """DRF authentication backed by PyJWT."""

    def __init__(self, config: Optional[LicensingConfig] = None):
        self.config = config or get_licensing_config()

    def authenticate(self, request: Request) -> Optional[Tuple[CallerContext, str]]:
        """
        Authenticate the request.

        Args:
            request: DRF request

        Returns:
            (CallerContext, token) or None when no bearer token is sent

        Raises:
            AuthenticationFailed: If the token is malformed, expired or invalid
        """
        header = get_authorization_header(request).split()
        if not header or header[0].decode("latin-1").lower() != KEYWORD.lower():
            return None
        if len(header) != 2:
            raise exceptions.AuthenticationFailed("Invalid authorization header")

        try:
            token = header[1].decode("utf-8")
        except UnicodeError as e:
            raise exceptions.AuthenticationFailed("Invalid authorization header") from e

        claims = self._decode(token)
        email = claims.get("email")
        if not email:
            raise exceptions.AuthenticationFailed("Token has no email claim")

        caller = CallerContext(
            email=str(email).strip(),
            role=UserRole.parse(claims.get("role") or claims.get("userType")),
            user_id=_user_id_claim(claims),
        )
        return caller, token

    def authenticate_header(self, request: Request) -> str:
        return f'{KEYWORD} realm="api"'

    def _decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token, self.config.jwt_secret, algorithms=[self.config.jwt_algorithm]
            )
        except jwt.ExpiredSignatureError as e:
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.info("Rejected bearer token: %s", e)
            raise exceptions.AuthenticationFailed("Invalid token") from e


def _user_id_claim(claims: Dict[str, Any]) -> Optional[int]:
    for name in ("user_id", "id", "sub"):
        value = claims.get(name)
        if value is None:
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
    return None
