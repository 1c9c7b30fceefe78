"""
License model.
"""
from django.db import models


class License(models.Model):
    """
    A license key record.

    Pool licenses have no admin until someone activates them.
    """

    STATUS_CHOICES = [
        ("unused", "Unused"),
        ("active", "Active"),
        ("expired", "Expired"),
    ]

    license_key = models.CharField(max_length=64, unique=True)
    admin = models.ForeignKey(
        "accounts.Admin",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="licenses",
    )
    assigned_email = models.EmailField(max_length=254, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="unused")
    is_active = models.BooleanField(default=True)
    expiry_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "licenses"
        db_table = "licenses"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["admin", "is_active", "status"], name="licenses_admin_state_idx"),
            models.Index(fields=["assigned_email"], name="licenses_email_idx"),
            models.Index(fields=["expiry_date"], name="licenses_expiry_idx"),
        ]

    def __str__(self):
        return self.license_key
