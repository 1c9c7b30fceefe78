"""
Admin repository port (interface).

This defines the contract for admin persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from accounts.domain.admin import Admin


@dataclass(frozen=True)
class AdminLicenseRow:
    """One row of the admin listing: an admin joined with one of its licenses."""

    id: int
    name: Optional[str]
    email: str
    is_active: bool
    license_key: Optional[str]
    status: Optional[str]
    expiry_date: Optional[datetime]


class AdminRepository(ABC):
    """
    Abstract repository for Admin entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def create(self, admin: Admin) -> Admin:
        """
        Insert a new admin.

        Args:
            admin: Admin entity without an id

        Returns:
            Admin entity with its store-assigned id

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken
        """

    @abstractmethod
    def save(self, admin: Admin) -> Admin:
        """
        Persist changes to an existing admin.

        Args:
            admin: Admin entity with an id

        Returns:
            Saved admin entity
        """

    @abstractmethod
    def find_by_id(self, admin_id: int) -> Optional[Admin]:
        """
        Find an account by id.

        Args:
            admin_id: Account id

        Returns:
            Admin entity or None if not found
        """

    @abstractmethod
    def find_by_email(self, email: str, for_update: bool = False) -> Optional[Admin]:
        """
        Find an account by exact email.

        Args:
            email: Email as stored
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            Admin entity or None if not found
        """

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """
        Check whether an account uses the email.

        Args:
            email: Email as stored

        Returns:
            True if an account exists, False otherwise
        """

    @abstractmethod
    def list_with_licenses(self) -> List[AdminLicenseRow]:
        """
        List role=admin accounts left-joined with their licenses.

        Returns:
            Rows ordered by admin id, newest first
        """
