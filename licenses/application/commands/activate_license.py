"""
ActivateLicenseCommand.

Command to bind a license key to the calling admin.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license key, as typed by the caller."""

    license_key: Optional[str]
