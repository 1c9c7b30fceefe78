"""
UpdateLicenseExpiryCommand.

Command to set or clear a license expiry date.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateLicenseExpiryCommand:
    """Command to change a license's expiry; None or blank clears it."""

    license_id: int
    expiry_date: Optional[str] = None
