from notifications.infrastructure.models import Notification  # noqa: F401
