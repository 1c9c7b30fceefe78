"""
ToggleLicenseCommand.

Command to suspend or resume a license.
"""
from dataclasses import dataclass


@dataclass
class ToggleLicenseCommand:
    """Command to flip a license's active flag."""

    license_id: int
