"""
ValidateLicenseQuery.

Query whether the caller currently holds a usable license.
"""
from dataclasses import dataclass


@dataclass
class ValidateLicenseQuery:
    """The caller's identity comes from the credential, so there are no fields."""
