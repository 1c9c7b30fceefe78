"""
License lifecycle handlers.

Handlers for generate, activate, toggle, update expiry, renew and
expire commands. Each handler does its store work inside one unit of
work and publishes domain events only after that work has committed.
"""
import logging
from datetime import datetime, tzinfo
from typing import Callable, List, Optional

from django.utils import timezone

from accounts.ports.admin_repository import AdminRepository
from core.application.authorization import require_authenticated, require_superadmin
from core.application.inputs import is_blank, parse_identifier
from core.config import LicensingConfig
from core.domain.events import EventBus
from core.domain.exceptions import (
    ActiveLicenseExistsError,
    AdminNotFoundError,
    InvalidInputError,
    LicenseBoundElsewhereError,
    LicenseExpiredError,
    LicenseNotFoundError,
)
from core.domain.value_objects import CallerContext, LicenseStatus
from core.ports.unit_of_work import UnitOfWork
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.generate_license import GenerateLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.toggle_license import ToggleLicenseCommand
from licenses.application.commands.update_expiry import UpdateLicenseExpiryCommand
from licenses.application.dto.license_dto import (
    GeneratedLicenseDTO,
    LicenseDTO,
    LicenseExpiryDTO,
    LicenseToggleDTO,
)
from licenses.domain.events import (
    LicenseActivated,
    LicenseExpired,
    LicenseExpiryUpdated,
    LicenseGenerated,
    LicenseRenewed,
    LicenseToggled,
)
from licenses.domain.expiry import parse_expiry_date
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key, normalize_license_key
from licenses.domain.services import allocate_license
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class GenerateLicenseHandler:
    """Handler for GenerateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        config: LicensingConfig,
        key_generator: Callable[[], str] = generate_license_key,
        clock: Callable[[], datetime] = timezone.now,
        tz: Optional[tzinfo] = None,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.config = config
        self.key_generator = key_generator
        self.clock = clock
        self.tz = tz

    def handle(self, caller: CallerContext, command: GenerateLicenseCommand) -> GeneratedLicenseDTO:
        """
        Handle generate license command.

        Args:
            caller: Resolved caller identity
            command: GenerateLicenseCommand

        Returns:
            GeneratedLicenseDTO

        Raises:
            UnauthorizedError, ForbiddenError: If the caller is not a superadmin
            InvalidExpiryDateError: If the expiry date cannot be parsed
            LicenseKeyExhaustedError: If no unique key was found
        """
        require_superadmin(caller)
        expiry = parse_expiry_date(command.expiry_date, self.tz)
        now = self.clock()

        with self.unit_of_work.atomic():
            license = allocate_license(
                self.license_repository,
                lambda key: License.create_unassigned(key, expiry_date=expiry, now=now),
                self.key_generator,
                self.config.key_generation_attempts,
            )

        logger.info("License %s generated", license.id, extra={"license_id": license.id})
        self.event_bus.publish(
            LicenseGenerated(
                license_id=license.id,
                license_key=license.license_key,
                expiry_date=license.expiry_date,
            )
        )
        return GeneratedLicenseDTO(
            id=license.id, license_key=license.license_key, expiry_date=license.expiry_date
        )


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        admin_repository: AdminRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.admin_repository = admin_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, caller: CallerContext, command: ActivateLicenseCommand) -> LicenseDTO:
        """
        Handle activate license command.

        The key is validated before any store access. The license row is
        locked before the admin row, so concurrent activations for one
        admin run one after the other and only one can pass the
        active-license check.

        Args:
            caller: Resolved caller identity
            command: ActivateLicenseCommand

        Returns:
            LicenseDTO of the activated license

        Raises:
            InvalidInputError: If the key is missing or malformed
            LicenseNotFoundError: If no license has the key
            AdminNotFoundError: If the caller has no account
            LicenseBoundElsewhereError: If another admin owns the license
            LicenseExpiredError: If the license is expired or past its expiry date
            ActiveLicenseExistsError: If the caller already has an active license
        """
        caller = require_authenticated(caller)
        key = normalize_license_key(command.license_key)
        now = self.clock()

        with self.unit_of_work.atomic():
            license = self.license_repository.find_by_key(key, for_update=True)
            if not license:
                raise LicenseNotFoundError()

            admin = self.admin_repository.find_by_email(caller.email, for_update=True)
            if not admin:
                raise AdminNotFoundError("User not found")

            if license.is_bound_to_other(admin.id):
                raise LicenseBoundElsewhereError()

            if license.is_expired(now):
                raise LicenseExpiredError()

            if self.license_repository.find_active_by_admin(admin.id):
                raise ActiveLicenseExistsError()

            activated = self.license_repository.save(
                license.activate_for(admin.id, caller.email, now=now)
            )

        self.event_bus.publish(
            LicenseActivated(
                license_id=activated.id,
                license_key=activated.license_key,
                admin_id=admin.id,
                email=caller.email,
            )
        )
        return LicenseDTO.from_entity(activated)


class ToggleLicenseHandler:
    """Handler for ToggleLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, caller: CallerContext, command: ToggleLicenseCommand) -> LicenseToggleDTO:
        """
        Handle toggle license command.

        Args:
            caller: Resolved caller identity
            command: ToggleLicenseCommand

        Returns:
            LicenseToggleDTO with the new active flag

        Raises:
            LicenseNotFoundError: If license not found
            ActiveLicenseExistsError: If switching on would give the owner a
                second active license
        """
        require_superadmin(caller)
        license_id = parse_identifier(command.license_id, "license_id")

        with self.unit_of_work.atomic():
            license = self.license_repository.find_by_id(license_id)
            if not license:
                raise LicenseNotFoundError()
            if (
                not license.is_active
                and license.status == LicenseStatus.ACTIVE
                and license.admin_id is not None
            ):
                current = self.license_repository.find_active_by_admin(license.admin_id)
                if current is not None and current.id != license.id:
                    raise ActiveLicenseExistsError("Admin already has an active license")
            toggled = self.license_repository.save(license.toggle_active(now=self.clock()))

        self.event_bus.publish(
            LicenseToggled(
                license_id=toggled.id, is_active=toggled.is_active, admin_id=toggled.admin_id
            )
        )
        return LicenseToggleDTO(id=toggled.id, is_active=toggled.is_active)


class _ExpiryChangeMixin:
    """Shared logic for commands that move a license's expiry date."""

    license_repository: LicenseRepository

    def _apply_expiry(
        self, license: License, expiry: Optional[datetime], now: datetime
    ) -> License:
        """
        Set the expiry and bring an expired license back when it is current again.

        The license returns to the active stage only while its owner holds
        no other active license.
        """
        updated = license.with_expiry(expiry, now=now)
        if updated.status != LicenseStatus.EXPIRED or updated.is_overdue(now):
            return updated
        if updated.admin_id is not None:
            current = self.license_repository.find_active_by_admin(updated.admin_id)
            if current is not None and current.id != updated.id:
                logger.info(
                    "License %s stays expired; admin %s holds license %s",
                    updated.id,
                    updated.admin_id,
                    current.id,
                )
                return updated
        return updated.revive(now=now)


class UpdateLicenseExpiryHandler(_ExpiryChangeMixin):
    """Handler for UpdateLicenseExpiryCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Callable[[], datetime] = timezone.now,
        tz: Optional[tzinfo] = None,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock
        self.tz = tz

    def handle(
        self, caller: CallerContext, command: UpdateLicenseExpiryCommand
    ) -> LicenseExpiryDTO:
        """
        Handle update expiry command; a blank date clears the expiry.

        Args:
            caller: Resolved caller identity
            command: UpdateLicenseExpiryCommand

        Returns:
            LicenseExpiryDTO

        Raises:
            InvalidExpiryDateError: If the date cannot be parsed
            LicenseNotFoundError: If license not found
        """
        require_superadmin(caller)
        license_id = parse_identifier(command.license_id, "license_id")
        expiry = parse_expiry_date(command.expiry_date, self.tz)
        now = self.clock()

        with self.unit_of_work.atomic():
            license = self.license_repository.find_by_id(license_id)
            if not license:
                raise LicenseNotFoundError()
            updated = self.license_repository.save(self._apply_expiry(license, expiry, now))

        self.event_bus.publish(
            LicenseExpiryUpdated(
                license_id=updated.id, expiry_date=updated.expiry_date, admin_id=updated.admin_id
            )
        )
        return LicenseExpiryDTO(
            id=updated.id, expiry_date=updated.expiry_date, status=updated.status.value
        )


class RenewLicenseHandler(_ExpiryChangeMixin):
    """Handler for RenewLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Callable[[], datetime] = timezone.now,
        tz: Optional[tzinfo] = None,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock
        self.tz = tz

    def handle(self, caller: CallerContext, command: RenewLicenseCommand) -> LicenseExpiryDTO:
        """
        Handle renew license command.

        Both fields are required, and the date goes through the same
        parser as UpdateLicenseExpiryCommand.

        Args:
            caller: Resolved caller identity
            command: RenewLicenseCommand

        Returns:
            LicenseExpiryDTO

        Raises:
            InvalidInputError: If a field is missing or malformed
            LicenseNotFoundError: If license not found
        """
        require_superadmin(caller)
        if is_blank(command.license_id) or is_blank(command.new_expiry_date):
            raise InvalidInputError(
                "Missing fields: license_id and new_expiry_date are required",
                code="MISSING_FIELDS",
            )
        license_id = parse_identifier(command.license_id, "license_id")
        expiry = parse_expiry_date(command.new_expiry_date, self.tz)
        now = self.clock()

        with self.unit_of_work.atomic():
            license = self.license_repository.find_by_id(license_id)
            if not license:
                raise LicenseNotFoundError()
            renewed = self.license_repository.save(self._apply_expiry(license, expiry, now))

        self.event_bus.publish(
            LicenseRenewed(
                license_id=renewed.id, expiry_date=renewed.expiry_date, admin_id=renewed.admin_id
            )
        )
        return LicenseExpiryDTO(
            id=renewed.id, expiry_date=renewed.expiry_date, status=renewed.status.value
        )


class ExpireOverdueLicensesHandler:
    """Marks active licenses whose expiry has passed as expired."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    def handle(self, dry_run: bool = False) -> List[LicenseDTO]:
        """
        Expire overdue licenses.

        Args:
            dry_run: Report the overdue licenses without changing them

        Returns:
            DTOs of the overdue licenses (as stored after the update)
        """
        now = self.clock()
        with self.unit_of_work.atomic():
            overdue = self.license_repository.find_overdue(now)
            if dry_run:
                return [LicenseDTO.from_entity(license) for license in overdue]
            expired = [self.license_repository.save(license.mark_expired(now=now)) for license in overdue]

        for license in expired:
            logger.info("Marked license %s as expired", license.id, extra={"license_id": license.id})
            self.event_bus.publish(
                LicenseExpired(
                    license_id=license.id,
                    license_key=license.license_key,
                    admin_id=license.admin_id,
                )
            )
        return [LicenseDTO.from_entity(license) for license in expired]
