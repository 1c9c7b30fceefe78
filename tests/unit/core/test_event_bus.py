"""
Unit tests for the in-memory event bus and event handlers.
"""

from datetime import datetime, timezone

from accounts.domain.events import AdminCreated
from core.domain.events import EventHandler
from core.domain.value_objects import UserRole
from core.infrastructure.event_handlers import (
    AuditLogEventHandler,
    NotificationEventHandler,
    register_event_handlers,
)
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import (
    LicenseActivated,
    LicenseExpiryUpdated,
    LicenseRenewed,
    LicenseToggled,
)
from fakes import InMemoryNotificationRepository


class CollectingHandler(EventHandler):
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    def handle(self, event):
        raise RuntimeError("notification store unavailable")


class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    def test_publish_to_subscribers(self):
        """Test handlers receive events of their type only."""
        bus = InMemoryEventBus()
        handler = CollectingHandler()
        bus.subscribe(LicenseToggled, handler)

        toggled = LicenseToggled(license_id=1, is_active=False)
        bus.publish(toggled)
        bus.publish(LicenseActivated(license_id=1, license_key="K", admin_id=2, email="a@x.com"))

        assert handler.events == [toggled]

    def test_subclass_events_are_dispatched_by_exact_type(self):
        """Test a renewal is not delivered to expiry-update subscribers."""
        bus = InMemoryEventBus()
        handler = CollectingHandler()
        bus.subscribe(LicenseExpiryUpdated, handler)

        bus.publish(LicenseRenewed(license_id=1, expiry_date=None))

        assert handler.events == []

    def test_failing_handler_does_not_propagate(self):
        """Test a failing handler is skipped and later handlers still run."""
        bus = InMemoryEventBus()
        collecting = CollectingHandler()
        bus.subscribe(LicenseToggled, FailingHandler())
        bus.subscribe(LicenseToggled, collecting)

        bus.publish(LicenseToggled(license_id=1, is_active=True))

        assert len(collecting.events) == 1

    def test_repeated_subscription_is_ignored(self):
        """Test registering the same handler class twice delivers once."""
        bus = InMemoryEventBus()
        handler = CollectingHandler()
        bus.subscribe(LicenseToggled, handler)
        bus.subscribe(LicenseToggled, handler)

        bus.publish(LicenseToggled(license_id=1, is_active=True))

        assert len(handler.events) == 1

    def test_clear(self):
        """Test clear removes every subscription."""
        bus = InMemoryEventBus()
        handler = CollectingHandler()
        bus.subscribe(LicenseToggled, handler)
        bus.clear()

        bus.publish(LicenseToggled(license_id=1, is_active=True))

        assert handler.events == []


class TestDomainEvent:
    """Tests for DomainEvent."""

    def test_to_dict(self):
        """Test event serialization."""
        occurred = datetime(2025, 6, 15, tzinfo=timezone.utc)
        event = LicenseToggled(license_id=5, is_active=True, occurred_at=occurred)

        data = event.to_dict()

        assert data["aggregate_id"] == "5"
        assert data["event_type"] == "LicenseToggled"
        assert data["occurred_at"] == occurred.isoformat()


class TestNotificationEventHandler:
    """Tests for NotificationEventHandler."""

    def test_toggle_notifies_owner(self):
        """Test a toggle on an owned license notifies its admin."""
        repository = InMemoryNotificationRepository()
        NotificationEventHandler(repository).handle(
            LicenseToggled(license_id=3, is_active=False, admin_id=9)
        )

        notification = repository.notifications[0]
        assert notification.target_user_id == 9
        assert notification.notification_type == "license_toggled"
        assert notification.target_role is UserRole.ADMIN
        assert notification.related_license_id == 3
        assert "deactivated" in notification.message

    def test_toggle_on_pool_license_notifies_superadmin(self):
        """Test a toggle on an unowned license goes to the superadmin."""
        repository = InMemoryNotificationRepository()
        NotificationEventHandler(repository).handle(LicenseToggled(license_id=3, is_active=True))

        assert repository.notifications[0].target_role is UserRole.SUPERADMIN
        assert repository.notifications[0].target_user_id is None

    def test_admin_created_welcomes_admin(self):
        """Test the new admin receives its license key."""
        repository = InMemoryNotificationRepository()
        NotificationEventHandler(repository).handle(
            AdminCreated(admin_id=4, email="a@x.com", license_id=8, license_key="APP-AAAA-BBBB-CCCC")
        )

        assert "APP-AAAA-BBBB-CCCC" in repository.notifications[0].message
        assert repository.notifications[0].target_user_id == 4

    def test_register_event_handlers(self):
        """Test registration wires audit and notification handlers."""
        bus = InMemoryEventBus()
        repository = InMemoryNotificationRepository()
        register_event_handlers(bus, repository)
        register_event_handlers(bus, repository)

        bus.publish(LicenseToggled(license_id=1, is_active=True, admin_id=2))

        assert len(repository.notifications) == 1

    def test_audit_handler_logs(self, caplog):
        """Test the audit handler logs the event type and aggregate."""
        with caplog.at_level("INFO", logger="core.infrastructure.event_handlers"):
            AuditLogEventHandler().handle(LicenseToggled(license_id=12, is_active=True))

        assert "Audit log: LicenseToggled - 12" in caplog.text
