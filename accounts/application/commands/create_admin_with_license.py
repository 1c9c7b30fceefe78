"""
CreateAdminWithLicenseCommand.

Command to create an admin account together with its license.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CreateAdminWithLicenseCommand:
    """
    Command to create an admin and issue a bound license.

    Expiry precedence: ``expiry_date`` if given, otherwise
    ``start_date`` (default today) plus ``license_period_days``,
    otherwise no expiry.
    """

    email: Optional[str]
    password: Optional[str]
    name: Optional[str] = None
    start_date: Optional[str] = None
    expiry_date: Optional[str] = None
    license_period_days: Optional[Any] = None
