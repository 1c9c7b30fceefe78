"""
Unit tests for License domain entity.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
KEY = "APP-ABCD-EFGH-JKLM"


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_unassigned(self):
        """Test a pool license is unused but switched on."""
        expiry = NOW + timedelta(days=30)
        license = License.create_unassigned(KEY, expiry_date=expiry, now=NOW)

        assert license.id is None
        assert license.status == LicenseStatus.UNUSED
        assert license.is_active is True
        assert license.is_assigned is False
        assert license.expiry_date == expiry
        assert license.created_at == NOW
        assert license.is_valid() is False

    def test_create_assigned(self):
        """Test a license issued to an admin starts active."""
        license = License.create_assigned(KEY, admin_id=7, assigned_email="a@x.com", now=NOW)

        assert license.status == LicenseStatus.ACTIVE
        assert license.admin_id == 7
        assert license.assigned_email == "a@x.com"
        assert license.is_valid() is True

    def test_empty_key_rejected(self):
        """Test creating a license without a key."""
        with pytest.raises(ValueError):
            License.create_unassigned("  ")

    def test_activate_for(self):
        """Test binding a pool license to an admin."""
        license = License.create_unassigned(KEY, now=NOW).activate_for(3, "a@x.com", now=NOW)

        assert license.admin_id == 3
        assert license.assigned_email == "a@x.com"
        assert license.status == LicenseStatus.ACTIVE
        assert license.is_active is True

    def test_activate_for_switches_license_back_on(self):
        """Test activation turns the suspension switch on."""
        license = License.create_unassigned(KEY, now=NOW).toggle_active(now=NOW)

        assert license.activate_for(3, "a@x.com").is_active is True

    def test_activate_for_other_admin_rejected(self):
        """Test a license bound to one admin cannot be bound to another."""
        license = License.create_assigned(KEY, admin_id=1, assigned_email="a@x.com")

        assert license.is_bound_to_other(2) is True
        assert license.is_bound_to_other(1) is False
        with pytest.raises(ValueError):
            license.activate_for(2, "b@x.com")

    def test_toggle_active_keeps_status(self):
        """Test toggling flips only the switch."""
        license = License.create_assigned(KEY, admin_id=1, assigned_email="a@x.com")
        toggled = license.toggle_active(now=NOW)

        assert toggled.is_active is False
        assert toggled.status == LicenseStatus.ACTIVE
        assert toggled.is_valid() is False
        assert toggled.toggle_active(now=NOW).is_active is True

    def test_with_expiry_set_and_clear(self):
        """Test setting and clearing the expiry date."""
        license = License.create_unassigned(KEY, now=NOW)
        expiry = NOW + timedelta(days=10)

        assert license.with_expiry(expiry, now=NOW).expiry_date == expiry
        assert license.with_expiry(expiry, now=NOW).with_expiry(None, now=NOW).expiry_date is None

    def test_is_overdue(self):
        """Test overdue detection."""
        license = License.create_unassigned(KEY, expiry_date=NOW - timedelta(seconds=1))

        assert license.is_overdue(NOW) is True
        assert license.with_expiry(None).is_overdue(NOW) is False
        assert license.with_expiry(NOW + timedelta(days=1)).is_overdue(NOW) is False

    def test_is_expired(self):
        """Test the expired stage and a passed expiry both count as expired."""
        license = License.create_assigned(KEY, admin_id=1, assigned_email="a@x.com")

        assert license.is_expired(NOW) is False
        assert license.mark_expired(now=NOW).is_expired(NOW) is True
        assert license.with_expiry(NOW - timedelta(seconds=1)).is_expired(NOW) is True

    def test_activate_for_expired_rejected(self):
        """Test an expired license cannot be bound again."""
        license = License.create_assigned(KEY, admin_id=1, assigned_email="a@x.com")

        with pytest.raises(ValueError):
            license.mark_expired(now=NOW).activate_for(1, "a@x.com")

    def test_mark_expired_and_revive(self):
        """Test the expired stage round trip."""
        license = License.create_assigned(KEY, admin_id=1, assigned_email="a@x.com")
        expired = license.mark_expired(now=NOW)

        assert expired.status == LicenseStatus.EXPIRED
        assert expired.is_valid() is False
        assert expired.revive(now=NOW).status == LicenseStatus.ACTIVE

    def test_revive_requires_expired(self):
        """Test only an expired license can be revived."""
        with pytest.raises(ValueError):
            License.create_unassigned(KEY).revive()
