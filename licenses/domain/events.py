"""
License domain events.

Domain events represent something that happened in the license domain.
"""

from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseGenerated(DomainEvent):
    """Event raised when an unassigned license is added to the pool."""

    def __init__(
        self,
        license_id: int,
        license_key: str,
        expiry_date: Optional[datetime] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseGenerated event.

        Args:
            license_id: License id
            license_key: Generated key
            expiry_date: Expiry of the new license, if any
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=license_id, occurred_at=occurred_at)
        self.license_id = license_id
        self.license_key = license_key
        self.expiry_date = expiry_date


class LicenseActivated(DomainEvent):
    """Event raised when a license is bound to an admin."""

    def __init__(
        self,
        license_id: int,
        license_key: str,
        admin_id: int,
        email: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            license_id: License id
            license_key: Activated key
            admin_id: Admin the license is now bound to
            email: Email the license was assigned to
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=license_id, occurred_at=occurred_at)
        self.license_id = license_id
        self.license_key = license_key
        self.admin_id = admin_id
        self.email = email


class LicenseToggled(DomainEvent):
    """Event raised when a license is suspended or resumed."""

    def __init__(
        self,
        license_id: int,
        is_active: bool,
        admin_id: Optional[int] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=license_id, occurred_at=occurred_at)
        self.license_id = license_id
        self.is_active = is_active
        self.admin_id = admin_id


class LicenseExpiryUpdated(DomainEvent):
    """Event raised when a license expiry is set or cleared."""

    def __init__(
        self,
        license_id: int,
        expiry_date: Optional[datetime],
        admin_id: Optional[int] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=license_id, occurred_at=occurred_at)
        self.license_id = license_id
        self.expiry_date = expiry_date
        self.admin_id = admin_id


class LicenseRenewed(LicenseExpiryUpdated):
    """Event raised when a superadmin renews a license."""


class LicenseExpired(DomainEvent):
    """Event raised when an overdue license is marked expired."""

    def __init__(
        self,
        license_id: int,
        license_key: str,
        admin_id: Optional[int] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=license_id, occurred_at=occurred_at)
        self.license_id = license_id
        self.license_key = license_key
        self.admin_id = admin_id
