"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import CallerContext, Email, LicenseStatus, UserRole


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        """Test empty email."""
        with pytest.raises(ValueError):
            Email("")


class TestUserRole:
    """Tests for UserRole parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("admin", UserRole.ADMIN),
            ("superadmin", UserRole.SUPERADMIN),
            (" SuperAdmin ", UserRole.SUPERADMIN),
            ("customer", UserRole.USER),
            ("", UserRole.USER),
            (None, UserRole.USER),
        ],
    )
    def test_parse(self, raw, expected):
        """Test role claims resolve to a role, unknown values to a plain user."""
        assert UserRole.parse(raw) is expected


class TestCallerContext:
    """Tests for CallerContext."""

    def test_superadmin(self):
        """Test superadmin capability flags."""
        caller = CallerContext(email="root@example.com", role=UserRole.SUPERADMIN)
        assert caller.is_authenticated is True
        assert caller.is_superadmin is True
        assert caller.is_admin is False

    def test_missing_email_is_not_authenticated(self):
        """Test a caller without an email has no identity."""
        assert CallerContext(email=None, role=UserRole.ADMIN).is_authenticated is False


class TestLicenseStatus:
    """Tests for LicenseStatus."""

    def test_values(self):
        """Test stored status values."""
        assert [status.value for status in LicenseStatus] == ["unused", "active", "expired"]
        assert str(LicenseStatus.ACTIVE) == "active"
