"""
Notification model.
"""
from django.db import models


class Notification(models.Model):
    """A dashboard notification produced by a license lifecycle event."""

    notification_type = models.CharField(max_length=50, db_column="type")
    message = models.TextField()
    target_role = models.CharField(max_length=20)
    target_user = models.ForeignKey(
        "accounts.Admin",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    related_license = models.ForeignKey(
        "licenses.License",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "notifications"
        db_table = "notifications"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.notification_type}: {self.message}"
