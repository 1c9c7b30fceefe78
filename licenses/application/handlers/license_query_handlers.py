"""
License query handlers.

Read-only handlers: validate, list, and the expiring licenses report.
"""
from datetime import datetime, tzinfo
from typing import Callable, List, Optional

from django.utils import timezone

from accounts.ports.admin_repository import AdminRepository
from core.application.authorization import require_authenticated, require_superadmin
from core.config import LicensingConfig
from core.domain.exceptions import InvalidInputError
from core.domain.value_objects import CallerContext
from licenses.application.dto.license_dto import (
    ExpiringLicenseDTO,
    LicenseDTO,
    LicenseValidationDTO,
)
from licenses.application.queries.list_expiring_licenses import ListExpiringLicensesQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.domain.expiry import expiring_window
from licenses.ports.license_repository import LicenseRepository


class ValidateLicenseHandler:
    """Handler for ValidateLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository, admin_repository: AdminRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.admin_repository = admin_repository

    def handle(
        self, caller: CallerContext, query: Optional[ValidateLicenseQuery] = None
    ) -> LicenseValidationDTO:
        """
        Handle validate license query.

        Admins are matched through their account id; every other role
        through the email the license was assigned to. A missing
        license is a negative answer, not an error.

        Args:
            caller: Resolved caller identity
            query: ValidateLicenseQuery

        Returns:
            LicenseValidationDTO

        Raises:
            UnauthorizedError: If the caller has no identity
        """
        caller = require_authenticated(caller)
        if caller.is_admin:
            admin = self.admin_repository.find_by_email(caller.email)
            license = self.license_repository.find_active_by_admin(admin.id) if admin else None
        else:
            license = self.license_repository.find_active_by_assigned_email(caller.email)

        if license is None or not license.is_valid():
            return LicenseValidationDTO(valid=False)
        return LicenseValidationDTO(
            valid=True, license_key=license.license_key, expiry_date=license.expiry_date
        )


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository, admin_repository: AdminRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.admin_repository = admin_repository

    def handle(
        self, caller: CallerContext, query: Optional[ListLicensesQuery] = None
    ) -> List[LicenseDTO]:
        """
        Handle list licenses query.

        Args:
            caller: Resolved caller identity
            query: ListLicensesQuery

        Returns:
            LicenseDTOs, newest first
        """
        caller = require_authenticated(caller)
        if caller.is_superadmin:
            licenses = self.license_repository.list_all()
        else:
            admin_id = caller.user_id
            if admin_id is None:
                admin = self.admin_repository.find_by_email(caller.email)
                admin_id = admin.id if admin else None
            licenses = self.license_repository.list_by_admin(admin_id) if admin_id else []
        return [LicenseDTO.from_entity(license) for license in licenses]


class ListExpiringLicensesHandler:
    """Handler for ListExpiringLicensesQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        config: LicensingConfig,
        clock: Callable[[], datetime] = timezone.now,
        tz: Optional[tzinfo] = None,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.config = config
        self.clock = clock
        self.tz = tz

    def handle(
        self, caller: CallerContext, query: Optional[ListExpiringLicensesQuery] = None
    ) -> List[ExpiringLicenseDTO]:
        """
        Handle expiring licenses query.

        The window runs from the start of today to the end of the day
        ``window_days`` from now, both ends inclusive, in local time.

        Args:
            caller: Resolved caller identity
            query: ListExpiringLicensesQuery

        Returns:
            ExpiringLicenseDTOs, soonest expiry first
        """
        require_superadmin(caller)
        days = self.config.expiring_window_days
        if query is not None and query.window_days is not None:
            days = query.window_days
        if days < 0:
            raise InvalidInputError("Expiring window cannot be negative")

        start, end = expiring_window(self.clock(), days, self.tz)
        rows = self.license_repository.find_expiring_between(start, end)
        return [ExpiringLicenseDTO.from_row(row) for row in rows]
