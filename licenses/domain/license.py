"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import LicenseStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    ``status`` is the lifecycle stage; ``is_active`` is an independent
    suspension switch. A license with no ``admin_id`` sits in the
    unassigned pool. ``expiry_date`` of None means it never expires.
    """

    id: Optional[int]
    license_key: str
    status: LicenseStatus
    is_active: bool
    admin_id: Optional[int] = None
    assigned_email: Optional[str] = None
    expiry_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key or not self.license_key.strip():
            raise ValueError("License key cannot be empty")

    @classmethod
    def create_unassigned(
        cls,
        license_key: str,
        expiry_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> "License":
        """
        Create a pool license that nobody has activated yet.

        Args:
            license_key: Unique key
            expiry_date: Optional expiration datetime
            now: Creation timestamp

        Returns:
            License entity with status=unused, is_active=True
        """
        now = now or _utcnow()
        return cls(
            id=None,
            license_key=license_key,
            status=LicenseStatus.UNUSED,
            is_active=True,
            expiry_date=expiry_date,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_assigned(
        cls,
        license_key: str,
        admin_id: int,
        assigned_email: str,
        expiry_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> "License":
        """
        Create a license already bound to an admin.

        Args:
            license_key: Unique key
            admin_id: Owning admin id
            assigned_email: Owning admin email
            expiry_date: Optional expiration datetime
            now: Creation timestamp

        Returns:
            License entity with status=active, is_active=True
        """
        now = now or _utcnow()
        return cls(
            id=None,
            license_key=license_key,
            status=LicenseStatus.ACTIVE,
            is_active=True,
            admin_id=admin_id,
            assigned_email=assigned_email,
            expiry_date=expiry_date,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_assigned(self) -> bool:
        return self.admin_id is not None

    def is_bound_to_other(self, admin_id: int) -> bool:
        """True when the license belongs to an admin other than ``admin_id``."""
        return self.admin_id is not None and self.admin_id != admin_id

    def is_valid(self) -> bool:
        """
        Check whether the license currently grants access.

        Returns:
            True if the license is switched on and in the active stage
        """
        return self.is_active and self.status == LicenseStatus.ACTIVE

    def is_overdue(self, current_time: datetime) -> bool:
        return self.expiry_date is not None and self.expiry_date < current_time

    def is_expired(self, current_time: datetime) -> bool:
        """True when the license reached the expired stage or its expiry has passed."""
        return self.status == LicenseStatus.EXPIRED or self.is_overdue(current_time)

    def activate_for(
        self, admin_id: int, email: str, now: Optional[datetime] = None
    ) -> "License":
        """
        Bind the license to an admin.

        Args:
            admin_id: Admin id to bind
            email: Email to record as the assignee
            now: Update timestamp

        Returns:
            New License instance with status=active, is_active=True
        """
        if self.is_bound_to_other(admin_id):
            raise ValueError("License is bound to another admin")
        if self.status == LicenseStatus.EXPIRED:
            raise ValueError("An expired license cannot be activated")
        return replace(
            self,
            admin_id=admin_id,
            assigned_email=email,
            status=LicenseStatus.ACTIVE,
            is_active=True,
            updated_at=now or _utcnow(),
        )

    def toggle_active(self, now: Optional[datetime] = None) -> "License":
        """Flip the suspension switch, leaving status untouched."""
        return replace(self, is_active=not self.is_active, updated_at=now or _utcnow())

    def with_expiry(
        self, expiry_date: Optional[datetime], now: Optional[datetime] = None
    ) -> "License":
        """
        Set or clear the expiry date.

        Args:
            expiry_date: New expiry, or None for no expiry
            now: Update timestamp

        Returns:
            New License instance
        """
        return replace(self, expiry_date=expiry_date, updated_at=now or _utcnow())

    def mark_expired(self, now: Optional[datetime] = None) -> "License":
        return replace(self, status=LicenseStatus.EXPIRED, updated_at=now or _utcnow())

    def revive(self, now: Optional[datetime] = None) -> "License":
        """
        Return an expired license to the active stage.

        Returns:
            New License instance with status=active
        """
        if self.status != LicenseStatus.EXPIRED:
            raise ValueError("Only an expired license can be revived")
        return replace(self, status=LicenseStatus.ACTIVE, updated_at=now or _utcnow())
