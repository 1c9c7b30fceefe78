"""
ListLicensesQuery.

Query for the licenses visible to the caller.
"""
from dataclasses import dataclass


@dataclass
class ListLicensesQuery:
    """Superadmins see every license; others see their own."""
