"""
ListAdminsQuery.
"""
from dataclasses import dataclass


@dataclass
class ListAdminsQuery:
    """Query for every admin joined with its licenses."""
