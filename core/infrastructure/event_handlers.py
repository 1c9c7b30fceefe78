"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and dashboard notifications.
"""

import logging
from typing import Callable, Dict, Optional

from accounts.domain.events import AdminCreated, AdminToggled
from core.domain.events import DomainEvent, EventBus, EventHandler
from core.domain.value_objects import UserRole
from licenses.domain.events import (
    LicenseActivated,
    LicenseExpired,
    LicenseExpiryUpdated,
    LicenseGenerated,
    LicenseRenewed,
    LicenseToggled,
)
from notifications.domain.notification import Notification
from notifications.ports.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)

ALL_EVENTS = (
    LicenseGenerated,
    LicenseActivated,
    LicenseToggled,
    LicenseExpiryUpdated,
    LicenseRenewed,
    LicenseExpired,
    AdminCreated,
    AdminToggled,
)


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the audit logger."""

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


def _expiry_text(expiry_date) -> str:
    return expiry_date.isoformat() if expiry_date else "never"


def _to_owner_or_superadmin(
    notification_type: str, message: str, admin_id: Optional[int], license_id: int
) -> Notification:
    if admin_id is None:
        return Notification(
            id=None,
            notification_type=notification_type,
            message=message,
            target_role=UserRole.SUPERADMIN,
            related_license_id=license_id,
        )
    return Notification(
        id=None,
        notification_type=notification_type,
        message=message,
        target_role=UserRole.ADMIN,
        target_user_id=admin_id,
        related_license_id=license_id,
    )


def _license_generated(event: LicenseGenerated) -> Notification:
    return Notification(
        id=None,
        notification_type="license_generated",
        message=f"License {event.license_key} generated (expires {_expiry_text(event.expiry_date)})",
        target_role=UserRole.SUPERADMIN,
        related_license_id=event.license_id,
    )


def _license_activated(event: LicenseActivated) -> Notification:
    return Notification(
        id=None,
        notification_type="license_activated",
        message=f"License {event.license_key} activated by {event.email}",
        target_role=UserRole.SUPERADMIN,
        target_user_id=None,
        related_license_id=event.license_id,
    )


def _license_toggled(event: LicenseToggled) -> Notification:
    state = "activated" if event.is_active else "deactivated"
    return _to_owner_or_superadmin(
        "license_toggled", f"Your license has been {state}", event.admin_id, event.license_id
    )


def _license_expiry_updated(event: LicenseExpiryUpdated) -> Notification:
    return _to_owner_or_superadmin(
        "license_expiry_updated",
        f"License expiry set to {_expiry_text(event.expiry_date)}",
        event.admin_id,
        event.license_id,
    )


def _license_renewed(event: LicenseRenewed) -> Notification:
    return _to_owner_or_superadmin(
        "license_renewed",
        f"Your license has been renewed until {_expiry_text(event.expiry_date)}",
        event.admin_id,
        event.license_id,
    )


def _license_expired(event: LicenseExpired) -> Notification:
    return _to_owner_or_superadmin(
        "license_expired",
        f"License {event.license_key} has expired",
        event.admin_id,
        event.license_id,
    )


def _admin_created(event: AdminCreated) -> Notification:
    return Notification(
        id=None,
        notification_type="admin_created",
        message=f"Welcome! Your license key is {event.license_key}",
        target_role=UserRole.ADMIN,
        target_user_id=event.admin_id,
        related_license_id=event.license_id,
    )


def _admin_toggled(event: AdminToggled) -> Notification:
    state = "enabled" if event.is_active else "disabled"
    return Notification(
        id=None,
        notification_type="admin_toggled",
        message=f"Your account has been {state}",
        target_role=UserRole.ADMIN,
        target_user_id=event.admin_id,
    )


NOTIFICATION_BUILDERS: Dict[type, Callable[[DomainEvent], Notification]] = {
    LicenseGenerated: _license_generated,
    LicenseActivated: _license_activated,
    LicenseToggled: _license_toggled,
    LicenseExpiryUpdated: _license_expiry_updated,
    LicenseRenewed: _license_renewed,
    LicenseExpired: _license_expired,
    AdminCreated: _admin_created,
    AdminToggled: _admin_toggled,
}


class NotificationEventHandler(EventHandler):
    """
    Stores a notification row for lifecycle events.

    Runs after the originating transaction has committed; a failure here
    is reported by the event bus and never reaches the caller.
    """

    def __init__(self, repository: NotificationRepository):
        self.repository = repository

    def handle(self, event: DomainEvent) -> None:
        """
        Build and store the notification for ``event``.

        Args:
            event: Domain event
        """
        builder = NOTIFICATION_BUILDERS.get(type(event))
        if builder is None:
            return
        notification = self.repository.add(builder(event))
        logger.debug(
            "Notification %s stored for %s", notification.notification_type, event.event_type
        )


def register_event_handlers(
    bus: Optional[EventBus] = None,
    notification_repository: Optional[NotificationRepository] = None,
) -> None:
    """
    Register all event handlers with the event bus.

    Args:
        bus: Event bus (defaults to the process-wide bus)
        notification_repository: Store for notifications (defaults to the ORM adapter)
    """
    if bus is None:
        from core.infrastructure.events import event_bus as bus
    if notification_repository is None:
        from notifications.infrastructure.repositories.django_notification_repository import (
            DjangoNotificationRepository,
        )

        notification_repository = DjangoNotificationRepository()

    audit_handler = AuditLogEventHandler()
    notification_handler = NotificationEventHandler(notification_repository)

    for event_type in ALL_EVENTS:
        bus.subscribe(event_type, audit_handler)
        bus.subscribe(event_type, notification_handler)

    logger.info("Event handlers registered")
