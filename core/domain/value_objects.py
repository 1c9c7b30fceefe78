"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Email:
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class LicenseStatus(Enum):
    """License lifecycle stage."""

    UNUSED = "unused"
    ACTIVE = "active"
    EXPIRED = "expired"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class UserRole(Enum):
    """Role tag carried by accounts and credentials."""

    ADMIN = "admin"
    SUPERADMIN = "superadmin"
    USER = "user"

    @classmethod
    def parse(cls, value: Optional[str]) -> "UserRole":
        """
        Resolve a role claim, treating anything unknown as a plain user.

        Args:
            value: Raw role string from a credential

        Returns:
            UserRole member
        """
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.USER

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CallerContext:
    """
    Identity and capability of the caller, resolved once at the boundary.

    Passed explicitly into every lifecycle operation.
    """

    email: Optional[str]
    role: UserRole
    user_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.email)

    @property
    def is_superadmin(self) -> bool:
        return self.role is UserRole.SUPERADMIN

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
