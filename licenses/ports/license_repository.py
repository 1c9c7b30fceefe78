"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from licenses.domain.license import License


@dataclass(frozen=True)
class ExpiringLicenseRow:
    """A license about to expire, joined with its owner."""

    license_id: int
    license_key: str
    expiry_date: datetime
    name: Optional[str]
    email: Optional[str]


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def create(self, license: License) -> License:
        """
        Insert a new license.

        Args:
            license: License entity without an id

        Returns:
            License entity with its store-assigned id

        Raises:
            LicenseKeyConflictError: If the key is already taken
        """

    @abstractmethod
    def save(self, license: License) -> License:
        """
        Persist changes to an existing license.

        Args:
            license: License entity with an id

        Returns:
            Saved license entity
        """

    @abstractmethod
    def find_by_id(self, license_id: int) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License id

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    def find_by_key(self, license_key: str, for_update: bool = False) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: Normalized key
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    def exists_by_key(self, license_key: str) -> bool:
        """Check whether a key is already taken."""

    @abstractmethod
    def find_active_by_admin(self, admin_id: int) -> Optional[License]:
        """
        Find the license granting access to an admin.

        Args:
            admin_id: Owning admin id

        Returns:
            A license with is_active=True and status=active, or None
        """

    @abstractmethod
    def find_active_by_assigned_email(self, email: str) -> Optional[License]:
        """Find a license with is_active=True and status=active assigned to ``email``."""

    @abstractmethod
    def list_all(self) -> List[License]:
        """List every license, newest first."""

    @abstractmethod
    def list_by_admin(self, admin_id: int) -> List[License]:
        """List the licenses owned by one admin, newest first."""

    @abstractmethod
    def find_expiring_between(self, start: datetime, end: datetime) -> List[ExpiringLicenseRow]:
        """
        Find owned, switched-on licenses expiring inside an inclusive window.

        Args:
            start: Window start
            end: Window end

        Returns:
            Rows joined with the owning admin, soonest expiry first
        """

    @abstractmethod
    def find_overdue(self, now: datetime) -> List[License]:
        """
        Find status=active licenses whose expiry date has passed.

        Args:
            now: Reference time

        Returns:
            List of License entities
        """
