"""
Licensing configuration.

A single immutable configuration object built from Django settings and
handed to the authentication layer and the lifecycle service.
"""
from dataclasses import dataclass

from django.conf import settings

STORE_BACKEND_ORM = "orm"
STORE_BACKEND_SQL = "sql"


@dataclass(frozen=True)
class LicensingConfig:
    """Settings for credential checks, key generation and expiry queries."""

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    key_generation_attempts: int = 10
    expiring_window_days: int = 7
    store_backend: str = STORE_BACKEND_ORM

    def __post_init__(self):
        if not self.jwt_secret:
            raise ValueError("JWT secret is required")
        if self.key_generation_attempts < 1:
            raise ValueError("Key generation attempts must be at least 1")
        if self.expiring_window_days < 0:
            raise ValueError("Expiring window cannot be negative")
        if self.store_backend not in (STORE_BACKEND_ORM, STORE_BACKEND_SQL):
            raise ValueError(f"Unknown license store backend: {self.store_backend}")

    @classmethod
    def from_settings(cls) -> "LicensingConfig":
        """
        Build configuration from the ``LICENSING`` settings dict.

        Returns:
            LicensingConfig instance
        """
        options = getattr(settings, "LICENSING", {})
        return cls(
            jwt_secret=options.get("JWT_SECRET") or settings.SECRET_KEY,
            jwt_algorithm=options.get("JWT_ALGORITHM", "HS256"),
            key_generation_attempts=int(options.get("KEY_GENERATION_ATTEMPTS", 10)),
            expiring_window_days=int(options.get("EXPIRING_WINDOW_DAYS", 7)),
            store_backend=options.get("STORE_BACKEND", STORE_BACKEND_ORM),
        )
