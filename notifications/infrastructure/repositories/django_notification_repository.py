"""
Django implementation of NotificationRepository port.
"""
from core.domain.value_objects import UserRole
from notifications.domain.notification import Notification
from notifications.infrastructure.models import Notification as NotificationModel
from notifications.ports.notification_repository import NotificationRepository


class DjangoNotificationRepository(NotificationRepository):
    """Django ORM implementation of NotificationRepository."""

    def _to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            notification_type=model.notification_type,
            message=model.message,
            target_role=UserRole.parse(model.target_role),
            target_user_id=model.target_user_id,
            related_license_id=model.related_license_id,
            is_read=model.is_read,
            created_at=model.created_at,
        )

    def add(self, notification: Notification) -> Notification:
        model = NotificationModel.objects.create(
            notification_type=notification.notification_type,
            message=notification.message,
            target_role=notification.target_role.value,
            target_user_id=notification.target_user_id,
            related_license_id=notification.related_license_id,
            is_read=notification.is_read,
        )
        return self._to_domain(model)
