"""
Integration tests for repository implementations.

Every test runs against both the ORM and the raw SQL adapters.
"""

from datetime import datetime, timedelta, timezone

import pytest

from accounts.domain.admin import Admin
from core.domain.exceptions import EmailAlreadyRegisteredError, LicenseKeyConflictError
from core.domain.value_objects import LicenseStatus, UserRole
from licenses.domain.license import License

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def saved_admin(admin_repository):
    """Fixture for an admin saved through the adapter under test."""

    def save(email="a@x.com", name="Alice", role=UserRole.ADMIN):
        return admin_repository.create(
            Admin.create(email=email, password_hash="hashed:pw", name=name, role=role)
        )

    return save


def assigned(key, admin, expiry=None):
    return License.create_assigned(
        key, admin_id=admin.id, assigned_email=str(admin.email), expiry_date=expiry
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminRepository:
    """Integration tests for AdminRepository."""

    def test_create_and_find(self, admin_repository, saved_admin):
        """Test creating and finding an admin."""
        admin = saved_admin()

        assert admin.id is not None
        assert admin.created_at is not None

        by_id = admin_repository.find_by_id(admin.id)
        by_email = admin_repository.find_by_email("a@x.com")
        assert by_id.email.value == "a@x.com"
        assert by_id.name == "Alice"
        assert by_id.role is UserRole.ADMIN
        assert by_id.is_active is True
        assert by_email.id == admin.id

    def test_find_missing(self, admin_repository):
        """Test finding non-existent admin."""
        assert admin_repository.find_by_id(999) is None
        assert admin_repository.find_by_email("ghost@x.com") is None
        assert admin_repository.exists_by_email("ghost@x.com") is False

    def test_find_by_email_for_update(self, admin_repository, saved_admin):
        """Test the locking lookup returns the same account."""
        admin = saved_admin()

        assert admin_repository.find_by_email("a@x.com", for_update=True).id == admin.id

    def test_duplicate_email(self, saved_admin):
        """Test the unique email constraint surfaces as a conflict."""
        saved_admin()

        with pytest.raises(EmailAlreadyRegisteredError):
            saved_admin()

    def test_save(self, admin_repository, saved_admin):
        """Test persisting a toggled admin."""
        admin = saved_admin()

        admin_repository.save(admin.toggle_active())

        assert admin_repository.find_by_id(admin.id).is_active is False

    def test_list_with_licenses(self, admin_repository, license_repository, saved_admin):
        """Test the listing is a left join over admin-role accounts, newest admin first."""
        saved_admin("root@x.com", role=UserRole.SUPERADMIN)
        first = saved_admin("a@x.com", name="A")
        second = saved_admin("b@x.com", name="B")
        license_repository.create(assigned("APP-AAAA-AAAA-AAAA", first))
        license_repository.create(assigned("APP-BBBB-BBBB-BBBB", first))

        rows = admin_repository.list_with_licenses()

        assert [(row.id, row.license_key) for row in rows] == [
            (second.id, None),
            (first.id, "APP-AAAA-AAAA-AAAA"),
            (first.id, "APP-BBBB-BBBB-BBBB"),
        ]
        assert rows[0].status is None
        assert rows[1].status == "active"
        assert rows[1].email == "a@x.com"


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseRepository:
    """Integration tests for LicenseRepository."""

    def test_create_and_find(self, license_repository):
        """Test creating and finding a license."""
        expiry = datetime(2025, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

        saved = license_repository.create(
            License.create_unassigned("APP-AAAA-BBBB-CCCC", expiry_date=expiry)
        )

        assert saved.id is not None
        found = license_repository.find_by_key("APP-AAAA-BBBB-CCCC")
        assert found.id == saved.id
        assert found.status == LicenseStatus.UNUSED
        assert found.is_active is True
        assert found.admin_id is None
        assert found.expiry_date == expiry
        assert license_repository.find_by_id(saved.id).license_key == "APP-AAAA-BBBB-CCCC"
        assert license_repository.exists_by_key("APP-AAAA-BBBB-CCCC") is True

    def test_find_missing(self, license_repository):
        """Test finding non-existent license."""
        assert license_repository.find_by_id(999) is None
        assert license_repository.find_by_key("APP-ZZZZ-ZZZZ-ZZZZ", for_update=True) is None
        assert license_repository.exists_by_key("APP-ZZZZ-ZZZZ-ZZZZ") is False

    def test_duplicate_key_conflict_keeps_transaction_usable(self, license_repository):
        """Test a key conflict can be retried in the same transaction."""
        license_repository.create(License.create_unassigned("APP-AAAA-BBBB-CCCC"))

        with pytest.raises(LicenseKeyConflictError):
            license_repository.create(License.create_unassigned("APP-AAAA-BBBB-CCCC"))

        retried = license_repository.create(License.create_unassigned("APP-DDDD-EEEE-FFFF"))
        assert retried.id is not None

    def test_save_binds_and_clears_expiry(self, license_repository, saved_admin):
        """Test saving an activated license and clearing its expiry."""
        admin = saved_admin()
        saved = license_repository.create(
            License.create_unassigned("APP-AAAA-BBBB-CCCC", expiry_date=NOW)
        )

        license_repository.save(saved.activate_for(admin.id, "a@x.com").with_expiry(None))

        found = license_repository.find_by_id(saved.id)
        assert found.admin_id == admin.id
        assert found.assigned_email == "a@x.com"
        assert found.status == LicenseStatus.ACTIVE
        assert found.expiry_date is None

    def test_find_active_by_admin(self, license_repository, saved_admin):
        """Test only a switched-on active license grants access."""
        admin = saved_admin()
        suspended = license_repository.create(assigned("APP-AAAA-AAAA-AAAA", admin))
        license_repository.save(suspended.toggle_active())
        expired = license_repository.create(assigned("APP-BBBB-BBBB-BBBB", admin))
        license_repository.save(expired.mark_expired())

        assert license_repository.find_active_by_admin(admin.id) is None

        current = license_repository.create(assigned("APP-CCCC-CCCC-CCCC", admin))

        assert license_repository.find_active_by_admin(admin.id).id == current.id
        assert license_repository.find_active_by_assigned_email("a@x.com").id == current.id
        assert license_repository.find_active_by_assigned_email("b@x.com") is None

    def test_listing_order(self, license_repository, saved_admin):
        """Test listings are newest first."""
        admin = saved_admin()
        first = license_repository.create(assigned("APP-AAAA-AAAA-AAAA", admin))
        second = license_repository.create(License.create_unassigned("APP-BBBB-BBBB-BBBB"))
        third = license_repository.create(assigned("APP-CCCC-CCCC-CCCC", admin))

        assert [lic.id for lic in license_repository.list_all()] == [third.id, second.id, first.id]
        assert [lic.id for lic in license_repository.list_by_admin(admin.id)] == [third.id, first.id]
        assert license_repository.list_by_admin(admin.id + 100) == []

    def test_find_expiring_between(self, license_repository, saved_admin):
        """Test the window is inclusive and only covers owned, switched-on licenses."""
        admin = saved_admin()
        start = datetime(2025, 6, 15, 0, 0, tzinfo=timezone.utc)
        end = datetime(2025, 6, 22, 23, 59, 59, tzinfo=timezone.utc)

        at_start = license_repository.create(assigned("APP-AAAA-AAAA-AAAA", admin, start))
        at_end = license_repository.create(assigned("APP-BBBB-BBBB-BBBB", admin, end))
        license_repository.create(assigned("APP-CCCC-CCCC-CCCC", admin, end + timedelta(seconds=1)))
        license_repository.create(assigned("APP-DDDD-DDDD-DDDD", admin, start - timedelta(seconds=1)))
        switched_off = license_repository.create(
            assigned("APP-EEEE-EEEE-EEEE", admin, start + timedelta(days=1))
        )
        license_repository.save(switched_off.toggle_active())
        license_repository.create(
            License.create_unassigned("APP-FFFF-FFFF-FFFF", expiry_date=start + timedelta(days=1))
        )

        rows = license_repository.find_expiring_between(start, end)

        assert [row.license_id for row in rows] == [at_start.id, at_end.id]
        assert rows[0].email == "a@x.com"
        assert rows[0].name == "Alice"
        assert rows[1].expiry_date == end

    def test_find_overdue(self, license_repository, saved_admin):
        """Test overdue means status=active with a past expiry."""
        admin = saved_admin()
        overdue = license_repository.create(
            assigned("APP-AAAA-AAAA-AAAA", admin, NOW - timedelta(minutes=1))
        )
        license_repository.create(assigned("APP-BBBB-BBBB-BBBB", admin, NOW + timedelta(minutes=1)))
        license_repository.create(assigned("APP-CCCC-CCCC-CCCC", admin))
        license_repository.create(
            License.create_unassigned("APP-DDDD-DDDD-DDDD", expiry_date=NOW - timedelta(days=1))
        )

        assert [lic.id for lic in license_repository.find_overdue(NOW)] == [overdue.id]
