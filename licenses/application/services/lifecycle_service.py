"""
License lifecycle service.

Single entry point for every license and admin operation. Each method
takes the resolved caller, runs one handler, and returns an
OperationResult; nothing raises past this layer.
"""
from datetime import datetime, tzinfo
from typing import Any, Callable, Optional

from django.contrib.auth.hashers import make_password
from django.utils import timezone

from accounts.application.commands.create_admin_with_license import (
    CreateAdminWithLicenseCommand,
)
from accounts.application.commands.toggle_admin import ToggleAdminActiveCommand
from accounts.application.handlers.admin_handlers import (
    CreateAdminWithLicenseHandler,
    ListAdminsHandler,
    ToggleAdminActiveHandler,
)
from accounts.application.queries.list_admins import ListAdminsQuery
from accounts.ports.admin_repository import AdminRepository
from core.application.operation import OperationResult, run_operation
from core.config import LicensingConfig
from core.domain.events import EventBus
from core.domain.value_objects import CallerContext
from core.ports.unit_of_work import UnitOfWork
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.generate_license import GenerateLicenseCommand
from licenses.application.commands.renew_license import RenewLicenseCommand
from licenses.application.commands.toggle_license import ToggleLicenseCommand
from licenses.application.commands.update_expiry import UpdateLicenseExpiryCommand
from licenses.application.handlers.license_lifecycle_handlers import (
    ActivateLicenseHandler,
    ExpireOverdueLicensesHandler,
    GenerateLicenseHandler,
    RenewLicenseHandler,
    ToggleLicenseHandler,
    UpdateLicenseExpiryHandler,
)
from licenses.application.handlers.license_query_handlers import (
    ListExpiringLicensesHandler,
    ListLicensesHandler,
    ValidateLicenseHandler,
)
from licenses.application.queries.list_expiring_licenses import ListExpiringLicensesQuery
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.domain.license_key import generate_license_key
from licenses.ports.license_repository import LicenseRepository


class LicenseLifecycleService:
    """
    Facade over the license and admin handlers.

    Depends only on the store ports, so any pair of adapters (ORM, raw
    SQL, in-memory fakes) can back it.
    """

    def __init__(
        self,
        license_repository: LicenseRepository,
        admin_repository: AdminRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        config: LicensingConfig,
        key_generator: Callable[[], str] = generate_license_key,
        password_hasher: Callable[[str], str] = make_password,
        clock: Callable[[], datetime] = timezone.now,
        tz: Optional[tzinfo] = None,
    ):
        """
        Initialize the service.

        Args:
            license_repository: License store
            admin_repository: Admin store
            unit_of_work: Transaction boundary shared by both stores
            event_bus: Receives domain events after commit
            config: Licensing configuration
            key_generator: Returns candidate license keys
            password_hasher: Hashes admin passwords
            clock: Returns the current aware datetime
            tz: Local time zone for date-only inputs (defaults to Django's)
        """
        self.config = config
        self._generate = GenerateLicenseHandler(
            license_repository, unit_of_work, event_bus, config, key_generator, clock, tz
        )
        self._activate = ActivateLicenseHandler(
            license_repository, admin_repository, unit_of_work, event_bus, clock
        )
        self._toggle = ToggleLicenseHandler(license_repository, unit_of_work, event_bus, clock)
        self._update_expiry = UpdateLicenseExpiryHandler(
            license_repository, unit_of_work, event_bus, clock, tz
        )
        self._renew = RenewLicenseHandler(license_repository, unit_of_work, event_bus, clock, tz)
        self._expire = ExpireOverdueLicensesHandler(
            license_repository, unit_of_work, event_bus, clock
        )
        self._validate = ValidateLicenseHandler(license_repository, admin_repository)
        self._list = ListLicensesHandler(license_repository, admin_repository)
        self._expiring = ListExpiringLicensesHandler(license_repository, config, clock, tz)
        self._create_admin = CreateAdminWithLicenseHandler(
            admin_repository,
            license_repository,
            unit_of_work,
            event_bus,
            config,
            password_hasher,
            key_generator,
            clock,
            tz,
        )
        self._toggle_admin = ToggleAdminActiveHandler(
            admin_repository, unit_of_work, event_bus, clock
        )
        self._list_admins = ListAdminsHandler(admin_repository)

    def generate(self, caller: CallerContext, expiry_date: Optional[str] = None) -> OperationResult:
        return run_operation(
            "generate_license",
            lambda: self._generate.handle(caller, GenerateLicenseCommand(expiry_date=expiry_date)),
            "License generated successfully",
        )

    def activate(self, caller: CallerContext, license_key: Optional[str]) -> OperationResult:
        return run_operation(
            "activate_license",
            lambda: self._activate.handle(caller, ActivateLicenseCommand(license_key=license_key)),
            "License activated successfully",
        )

    def validate(self, caller: CallerContext) -> OperationResult:
        """
        Report whether the caller holds a usable license.

        ``message`` distinguishes a valid license from a missing one;
        both are successful results.
        """
        result = run_operation(
            "validate_license", lambda: self._validate.handle(caller, ValidateLicenseQuery())
        )
        if not result.ok:
            return result
        message = "License is valid" if result.data.valid else "No active license found"
        return OperationResult.success(result.data, message)

    def list_all(self, caller: CallerContext) -> OperationResult:
        return run_operation(
            "list_licenses",
            lambda: self._list.handle(caller, ListLicensesQuery()),
            "Licenses retrieved successfully",
        )

    def toggle_active(self, caller: CallerContext, license_id: Any) -> OperationResult:
        result = run_operation(
            "toggle_license",
            lambda: self._toggle.handle(caller, ToggleLicenseCommand(license_id=license_id)),
        )
        if not result.ok:
            return result
        state = "activated" if result.data.is_active else "deactivated"
        return OperationResult.success(result.data, f"License {state} successfully")

    def update_expiry(
        self, caller: CallerContext, license_id: Any, expiry_date: Optional[str] = None
    ) -> OperationResult:
        return run_operation(
            "update_license_expiry",
            lambda: self._update_expiry.handle(
                caller, UpdateLicenseExpiryCommand(license_id=license_id, expiry_date=expiry_date)
            ),
            "Expiry date updated successfully",
        )

    def renew_license(
        self, caller: CallerContext, license_id: Any, new_expiry_date: Optional[str]
    ) -> OperationResult:
        return run_operation(
            "renew_license",
            lambda: self._renew.handle(
                caller, RenewLicenseCommand(license_id=license_id, new_expiry_date=new_expiry_date)
            ),
            "License renewed successfully",
        )

    def create_admin_with_license(
        self,
        caller: CallerContext,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str] = None,
        start_date: Optional[str] = None,
        expiry_date: Optional[str] = None,
        license_period_days: Any = None,
    ) -> OperationResult:
        command = CreateAdminWithLicenseCommand(
            email=email,
            password=password,
            name=name,
            start_date=start_date,
            expiry_date=expiry_date,
            license_period_days=license_period_days,
        )
        return run_operation(
            "create_admin_with_license",
            lambda: self._create_admin.handle(caller, command),
            "Admin created successfully",
        )

    def toggle_admin_active(self, caller: CallerContext, admin_id: Any) -> OperationResult:
        return run_operation(
            "toggle_admin_active",
            lambda: self._toggle_admin.handle(caller, ToggleAdminActiveCommand(admin_id=admin_id)),
            "Admin status updated",
        )

    def list_admins(self, caller: CallerContext) -> OperationResult:
        return run_operation(
            "list_admins",
            lambda: self._list_admins.handle(caller, ListAdminsQuery()),
            "Admins retrieved successfully",
        )

    def list_expiring_soon(
        self, caller: CallerContext, window_days: Optional[int] = None
    ) -> OperationResult:
        return run_operation(
            "list_expiring_licenses",
            lambda: self._expiring.handle(
                caller, ListExpiringLicensesQuery(window_days=window_days)
            ),
            "Expiring licenses retrieved successfully",
        )

    def expire_overdue_licenses(self, dry_run: bool = False) -> OperationResult:
        """
        Mark overdue active licenses as expired.

        System operation with no caller; run from the
        ``expire_licenses`` management command.
        """
        return run_operation(
            "expire_overdue_licenses",
            lambda: self._expire.handle(dry_run=dry_run),
            "Overdue licenses checked" if dry_run else "Overdue licenses expired",
        )
