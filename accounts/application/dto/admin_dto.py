"""
Admin DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from accounts.ports.admin_repository import AdminLicenseRow


@dataclass
class AdminDTO:
    """DTO for a newly created admin."""

    id: int
    email: str
    name: Optional[str]
    role: str
    is_active: bool


@dataclass
class IssuedLicenseDTO:
    """DTO for the license issued with a new admin."""

    id: int
    license_key: str
    status: str
    expiry_date: Optional[datetime]
    start_date: date


@dataclass
class CreatedAdminDTO:
    """DTO for create admin response."""

    admin: AdminDTO
    license: IssuedLicenseDTO


@dataclass
class AdminListItemDTO:
    """DTO for one row of the admin listing."""

    id: int
    name: Optional[str]
    email: str
    is_active: bool
    license_key: Optional[str]
    status: Optional[str]
    expiry_date: Optional[datetime]

    @classmethod
    def from_row(cls, row: AdminLicenseRow) -> "AdminListItemDTO":
        return cls(
            id=row.id,
            name=row.name,
            email=row.email,
            is_active=row.is_active,
            license_key=row.license_key,
            status=row.status,
            expiry_date=row.expiry_date,
        )


@dataclass
class AdminToggleDTO:
    """DTO for toggle admin response."""

    id: int
    is_active: bool
