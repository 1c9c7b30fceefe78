"""
ListExpiringLicensesQuery.

Query for owned licenses expiring soon.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListExpiringLicensesQuery:
    """Window length in days; None uses the configured default."""

    window_days: Optional[int] = None
