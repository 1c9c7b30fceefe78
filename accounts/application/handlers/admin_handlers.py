"""
Admin management handlers.

Handlers for creating an admin with its license, toggling an admin and
listing admins. All of them require a superadmin caller.
"""
import logging
from datetime import datetime, tzinfo
from typing import Callable, List, Optional

from django.contrib.auth.hashers import make_password
from django.utils import timezone

from accounts.application.commands.create_admin_with_license import (
    CreateAdminWithLicenseCommand,
)
from accounts.application.commands.toggle_admin import ToggleAdminActiveCommand
from accounts.application.dto.admin_dto import (
    AdminDTO,
    AdminListItemDTO,
    AdminToggleDTO,
    CreatedAdminDTO,
    IssuedLicenseDTO,
)
from accounts.application.queries.list_admins import ListAdminsQuery
from accounts.domain.admin import Admin
from accounts.domain.events import AdminCreated, AdminToggled
from accounts.ports.admin_repository import AdminRepository
from core.application.authorization import require_superadmin
from core.application.inputs import parse_identifier
from core.config import LicensingConfig
from core.domain.events import EventBus
from core.domain.exceptions import (
    AdminNotFoundError,
    EmailAlreadyRegisteredError,
    InvalidInputError,
)
from core.domain.value_objects import CallerContext, Email, UserRole
from core.ports.unit_of_work import UnitOfWork
from licenses.domain.expiry import (
    expiry_from_period,
    parse_date_value,
    parse_expiry_date,
    parse_period_days,
)
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key
from licenses.domain.services import allocate_license
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class CreateAdminWithLicenseHandler:
    """Handler for CreateAdminWithLicenseCommand."""

    def __init__(
        self,
        admin_repository: AdminRepository,
        license_repository: LicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        config: LicensingConfig,
        password_hasher: Callable[[str], str] = make_password,
        key_generator: Callable[[], str] = generate_license_key,
        clock: Callable[[], datetime] = timezone.now,
        tz: Optional[tzinfo] = None,
    ):
        """Initialize handler with its collaborators."""
        self.admin_repository = admin_repository
        self.license_repository = license_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.config = config
        self.password_hasher = password_hasher
        self.key_generator = key_generator
        self.clock = clock
        self.tz = tz

    def handle(
        self, caller: CallerContext, command: CreateAdminWithLicenseCommand
    ) -> CreatedAdminDTO:
        """
        Handle create admin command.

        The admin and its license are written in one transaction; if
        the license cannot be issued the admin is rolled back too.

        Args:
            caller: Resolved caller identity
            command: CreateAdminWithLicenseCommand

        Returns:
            CreatedAdminDTO

        Raises:
            InvalidInputError: If a field is missing or malformed
            EmailAlreadyRegisteredError: If the email is taken
            LicenseKeyExhaustedError: If no unique key was found
        """
        require_superadmin(caller)
        email = (command.email or "").strip()
        if not email or not command.password:
            raise InvalidInputError("Email and password required", code="MISSING_FIELDS")
        try:
            Email(email)
        except ValueError as e:
            raise InvalidInputError("Invalid email address", code="INVALID_EMAIL") from e

        now = self.clock()
        today = timezone.localtime(now, self.tz or timezone.get_current_timezone()).date()
        explicit_expiry = parse_expiry_date(command.expiry_date, self.tz)
        start_date = parse_date_value(command.start_date, "startDate")
        period_days = parse_period_days(command.license_period_days)

        if explicit_expiry is not None:
            expiry = explicit_expiry
        elif period_days is not None:
            expiry = expiry_from_period(start_date, period_days, today, self.tz)
        else:
            expiry = None

        with self.unit_of_work.atomic():
            if self.admin_repository.exists_by_email(email):
                raise EmailAlreadyRegisteredError()

            admin = self.admin_repository.create(
                Admin.create(
                    email=email,
                    password_hash=self.password_hasher(command.password),
                    name=command.name,
                    now=now,
                )
            )
            license = allocate_license(
                self.license_repository,
                lambda key: License.create_assigned(
                    key, admin_id=admin.id, assigned_email=email, expiry_date=expiry, now=now
                ),
                self.key_generator,
                self.config.key_generation_attempts,
            )

        logger.info(
            "Admin %s created with license %s",
            admin.id,
            license.id,
            extra={"admin_id": admin.id, "license_id": license.id},
        )
        self.event_bus.publish(
            AdminCreated(
                admin_id=admin.id,
                email=email,
                license_id=license.id,
                license_key=license.license_key,
            )
        )
        return CreatedAdminDTO(
            admin=AdminDTO(
                id=admin.id,
                email=str(admin.email),
                name=admin.name,
                role=admin.role.value,
                is_active=admin.is_active,
            ),
            license=IssuedLicenseDTO(
                id=license.id,
                license_key=license.license_key,
                status=license.status.value,
                expiry_date=license.expiry_date,
                start_date=start_date or today,
            ),
        )


class ToggleAdminActiveHandler:
    """Handler for ToggleAdminActiveCommand."""

    def __init__(
        self,
        admin_repository: AdminRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with its collaborators."""
        self.admin_repository = admin_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, caller: CallerContext, command: ToggleAdminActiveCommand) -> AdminToggleDTO:
        """
        Handle toggle admin command.

        Only accounts with the admin role can be toggled.

        Raises:
            AdminNotFoundError: If no admin has the id
        """
        require_superadmin(caller)
        admin_id = parse_identifier(command.admin_id, "admin_id")

        with self.unit_of_work.atomic():
            admin = self.admin_repository.find_by_id(admin_id)
            if admin is None or admin.role is not UserRole.ADMIN:
                raise AdminNotFoundError()
            toggled = self.admin_repository.save(admin.toggle_active(now=self.clock()))

        self.event_bus.publish(AdminToggled(admin_id=toggled.id, is_active=toggled.is_active))
        return AdminToggleDTO(id=toggled.id, is_active=toggled.is_active)


class ListAdminsHandler:
    """Handler for ListAdminsQuery."""

    def __init__(self, admin_repository: AdminRepository):
        self.admin_repository = admin_repository

    def handle(
        self, caller: CallerContext, query: Optional[ListAdminsQuery] = None
    ) -> List[AdminListItemDTO]:
        require_superadmin(caller)
        return [AdminListItemDTO.from_row(row) for row in self.admin_repository.list_with_licenses()]
