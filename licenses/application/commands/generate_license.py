"""
GenerateLicenseCommand.

Command to add an unassigned license to the pool.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class GenerateLicenseCommand:
    """Command to generate a pool license with an optional expiry date."""

    expiry_date: Optional[str] = None
