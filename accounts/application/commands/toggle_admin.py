"""
ToggleAdminActiveCommand.
"""
from dataclasses import dataclass


@dataclass
class ToggleAdminActiveCommand:
    """Command to enable or disable an admin account."""

    admin_id: int
