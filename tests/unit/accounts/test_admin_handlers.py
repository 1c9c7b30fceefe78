"""
Unit tests for the admin management handlers.
"""
from datetime import datetime, timezone

import pytest

from accounts.application.commands.create_admin_with_license import (
    CreateAdminWithLicenseCommand,
)
from accounts.application.commands.toggle_admin import ToggleAdminActiveCommand
from accounts.application.handlers.admin_handlers import (
    CreateAdminWithLicenseHandler,
    ListAdminsHandler,
    ToggleAdminActiveHandler,
)
from accounts.domain.admin import Admin
from accounts.domain.events import AdminCreated, AdminToggled
from core.domain.exceptions import (
    AdminNotFoundError,
    EmailAlreadyRegisteredError,
    ForbiddenError,
    InvalidInputError,
    LicenseKeyExhaustedError,
    UnauthorizedError,
)
from core.domain.value_objects import CallerContext, LicenseStatus, UserRole
from licenses.domain.license import License
from fakes import SequenceKeyGenerator

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def create_handler(
    fake_admin_repository, fake_license_repository, unit_of_work, recording_bus, config, clock
):
    """Factory fixture for CreateAdminWithLicenseHandler."""

    def build(key_generator=None):
        return CreateAdminWithLicenseHandler(
            admin_repository=fake_admin_repository,
            license_repository=fake_license_repository,
            unit_of_work=unit_of_work,
            event_bus=recording_bus,
            config=config,
            password_hasher=lambda raw: f"hashed:{raw}",
            key_generator=key_generator or SequenceKeyGenerator("APP-AAAA-BBBB-CCCC"),
            clock=clock,
            tz=timezone.utc,
        )

    return build


@pytest.fixture
def toggle_handler(fake_admin_repository, unit_of_work, recording_bus, clock):
    return ToggleAdminActiveHandler(fake_admin_repository, unit_of_work, recording_bus, clock)


class TestAdminEntity:
    """Tests for the Admin entity."""

    def test_create_trims_values(self):
        """Test email and name are trimmed on creation."""
        admin = Admin.create(email="  a@x.com ", password_hash="h", name="  ", now=NOW)

        assert admin.id is None
        assert admin.email.value == "a@x.com"
        assert admin.name is None
        assert admin.role is UserRole.ADMIN
        assert admin.is_active is True
        assert admin.created_at == NOW

    def test_requires_password_hash(self):
        """Test an admin cannot be built without a password hash."""
        with pytest.raises(ValueError):
            Admin.create(email="a@x.com", password_hash="")

    def test_toggle_returns_new_instance(self):
        """Test toggling leaves the original untouched."""
        admin = Admin.create(email="a@x.com", password_hash="h", now=NOW)

        toggled = admin.toggle_active(now=NOW)

        assert admin.is_active is True
        assert toggled.is_active is False


class TestCreateAdminWithLicenseHandler:
    """Tests for CreateAdminWithLicenseHandler."""

    def test_creates_admin_and_bound_license(
        self, create_handler, superadmin, store, recording_bus
    ):
        """Test the admin and its license are both stored."""
        command = CreateAdminWithLicenseCommand(
            email="new@x.com", password="pw", name="New", license_period_days=365
        )

        result = create_handler().handle(superadmin, command)

        assert result.admin.email == "new@x.com"
        assert result.admin.role == "admin"
        assert result.license.license_key == "APP-AAAA-BBBB-CCCC"
        assert result.license.status == "active"
        assert result.license.expiry_date == datetime(2026, 6, 15, 23, 59, 59, tzinfo=timezone.utc)

        license = store.licenses[result.license.id]
        assert license.admin_id == result.admin.id
        assert license.status == LicenseStatus.ACTIVE

        event = recording_bus.of_type(AdminCreated)[0]
        assert event.admin_id == result.admin.id
        assert event.license_key == "APP-AAAA-BBBB-CCCC"

    def test_duplicate_email_raises(self, create_handler, superadmin, registered_admin):
        """Test an existing email raises a conflict."""
        registered_admin("dup@x.com")

        with pytest.raises(EmailAlreadyRegisteredError):
            create_handler().handle(
                superadmin, CreateAdminWithLicenseCommand(email="dup@x.com", password="pw")
            )

    def test_invalid_start_date(self, create_handler, superadmin):
        """Test a malformed start date is invalid input."""
        command = CreateAdminWithLicenseCommand(
            email="s@x.com", password="pw", start_date="01/07/2025", license_period_days=5
        )

        with pytest.raises(InvalidInputError):
            create_handler().handle(superadmin, command)

    def test_exhaustion_leaves_no_admin(
        self, create_handler, superadmin, fake_license_repository, store, unit_of_work
    ):
        """Test the admin is rolled back when no key can be issued."""
        fake_license_repository.create(License.create_unassigned("APP-AAAA-BBBB-CCCC", now=NOW))

        with pytest.raises(LicenseKeyExhaustedError):
            create_handler().handle(
                superadmin, CreateAdminWithLicenseCommand(email="e@x.com", password="pw")
            )

        assert store.admins == {}
        assert unit_of_work.rollbacks == 1

    def test_anonymous_caller(self, create_handler):
        """Test creating an admin requires an identity."""
        with pytest.raises(UnauthorizedError):
            create_handler().handle(
                None, CreateAdminWithLicenseCommand(email="e@x.com", password="pw")
            )


class TestToggleAdminActiveHandler:
    """Tests for ToggleAdminActiveHandler."""

    def test_toggle(self, toggle_handler, superadmin, registered_admin, recording_bus):
        """Test the flag is flipped and an event is published."""
        admin, _ = registered_admin()

        result = toggle_handler.handle(superadmin, ToggleAdminActiveCommand(admin_id=str(admin.id)))

        assert result.id == admin.id
        assert result.is_active is False
        assert recording_bus.of_type(AdminToggled)[0].is_active is False

    def test_unknown_admin(self, toggle_handler, superadmin):
        """Test toggling an unknown admin."""
        with pytest.raises(AdminNotFoundError):
            toggle_handler.handle(superadmin, ToggleAdminActiveCommand(admin_id=42))

    def test_requires_superadmin(self, toggle_handler, registered_admin):
        """Test an admin cannot toggle another admin."""
        admin, caller = registered_admin()

        with pytest.raises(ForbiddenError):
            toggle_handler.handle(caller, ToggleAdminActiveCommand(admin_id=admin.id))


class TestListAdminsHandler:
    """Tests for ListAdminsHandler."""

    def test_only_admin_role_accounts_listed(
        self, fake_admin_repository, superadmin, registered_admin
    ):
        """Test superadmin accounts are not part of the listing."""
        fake_admin_repository.create(
            Admin.create("root@example.com", "hashed:pw", role=UserRole.SUPERADMIN, now=NOW)
        )
        admin, _ = registered_admin()

        rows = ListAdminsHandler(fake_admin_repository).handle(superadmin)

        assert [row.id for row in rows] == [admin.id]
        assert rows[0].license_key is None
        assert rows[0].status is None

    def test_plain_user_forbidden(self, fake_admin_repository):
        """Test a plain user cannot list admins."""
        caller = CallerContext(email="u@x.com", role=UserRole.USER)

        with pytest.raises(ForbiddenError):
            ListAdminsHandler(fake_admin_repository).handle(caller)
