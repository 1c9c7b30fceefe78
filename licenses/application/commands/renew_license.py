"""
RenewLicenseCommand.

Command to renew (extend) a license.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class RenewLicenseCommand:
    """Command to renew a license with a new expiration date."""

    license_id: Optional[Any]
    new_expiry_date: Optional[str]
