"""
Account domain events.
"""

from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class AdminCreated(DomainEvent):
    """Event raised when a superadmin creates an admin with a license."""

    def __init__(
        self,
        admin_id: int,
        email: str,
        license_id: int,
        license_key: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize AdminCreated event.

        Args:
            admin_id: New admin id
            email: New admin email
            license_id: License issued with the account
            license_key: Key of that license
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=admin_id, occurred_at=occurred_at)
        self.admin_id = admin_id
        self.email = email
        self.license_id = license_id
        self.license_key = license_key


class AdminToggled(DomainEvent):
    """Event raised when an admin account is enabled or disabled."""

    def __init__(self, admin_id: int, is_active: bool, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=admin_id, occurred_at=occurred_at)
        self.admin_id = admin_id
        self.is_active = is_active
