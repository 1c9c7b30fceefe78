"""
Admin domain entity.

Represents a user account managed by the superadmin. The entity is
immutable; state changes return new instances.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, UserRole


@dataclass(frozen=True)
class Admin:
    """
    Admin domain entity.

    ``id`` is None until the store assigns one.
    """

    id: Optional[int]
    email: Email
    password_hash: str
    role: UserRole
    is_active: bool
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate admin entity."""
        if not self.password_hash:
            raise ValueError("Password hash is required")

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        name: Optional[str] = None,
        role: UserRole = UserRole.ADMIN,
        now: Optional[datetime] = None,
    ) -> "Admin":
        """
        Create a new, active Admin entity.

        Args:
            email: Login email, stored trimmed
            password_hash: Already-hashed password
            name: Optional display name
            role: Account role
            now: Creation timestamp (defaults to current UTC time)

        Returns:
            Admin entity instance
        """
        now = now or datetime.now(timezone.utc)
        return cls(
            id=None,
            email=Email(email.strip()),
            password_hash=password_hash,
            role=role,
            is_active=True,
            name=(name or "").strip() or None,
            created_at=now,
            updated_at=now,
        )

    def toggle_active(self, now: Optional[datetime] = None) -> "Admin":
        """
        Return a copy with the active flag flipped.

        Args:
            now: Update timestamp (defaults to current UTC time)

        Returns:
            New Admin instance
        """
        return replace(
            self,
            is_active=not self.is_active,
            updated_at=now or datetime.now(timezone.utc),
        )
