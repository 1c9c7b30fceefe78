"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import License
from licenses.ports.license_repository import ExpiringLicenseRow


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: int
    license_key: str
    admin_id: Optional[int]
    assigned_email: Optional[str]
    status: str
    is_active: bool
    expiry_date: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            id=license.id,
            license_key=license.license_key,
            admin_id=license.admin_id,
            assigned_email=license.assigned_email,
            status=license.status.value,
            is_active=license.is_active,
            expiry_date=license.expiry_date,
            created_at=license.created_at,
            updated_at=license.updated_at,
        )


@dataclass
class GeneratedLicenseDTO:
    """DTO for generate license response."""

    id: int
    license_key: str
    expiry_date: Optional[datetime]


@dataclass
class LicenseValidationDTO:
    """DTO for validate license response."""

    valid: bool
    license_key: Optional[str] = None
    expiry_date: Optional[datetime] = None


@dataclass
class LicenseToggleDTO:
    """DTO for toggle license response."""

    id: int
    is_active: bool


@dataclass
class LicenseExpiryDTO:
    """DTO for update expiry and renew responses."""

    id: int
    expiry_date: Optional[datetime]
    status: str


@dataclass
class ExpiringLicenseDTO:
    """DTO for one entry of the expiring licenses report."""

    name: Optional[str]
    email: Optional[str]
    license_key: str
    expiry_date: datetime

    @classmethod
    def from_row(cls, row: ExpiringLicenseRow) -> "ExpiringLicenseDTO":
        return cls(
            name=row.name,
            email=row.email,
            license_key=row.license_key,
            expiry_date=row.expiry_date,
        )
