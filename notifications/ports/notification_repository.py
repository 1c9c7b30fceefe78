"""
Notification repository port (interface).
"""
from abc import ABC, abstractmethod

from notifications.domain.notification import Notification


class NotificationRepository(ABC):
    """Abstract store for notification records."""

    @abstractmethod
    def add(self, notification: Notification) -> Notification:
        """
        Insert a notification.

        Args:
            notification: Notification without an id

        Returns:
            Saved notification
        """
