"""
Notification domain entity.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import UserRole


@dataclass(frozen=True)
class Notification:
    """A message addressed to a role, optionally to one user."""

    id: Optional[int]
    notification_type: str
    message: str
    target_role: UserRole
    target_user_id: Optional[int] = None
    related_license_id: Optional[int] = None
    is_read: bool = False
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.notification_type:
            raise ValueError("Notification type is required")
        if not self.message:
            raise ValueError("Notification message is required")
