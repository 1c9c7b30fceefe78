"""
Admin account model.
"""
from django.db import models


class Admin(models.Model):
    """
    A user account: either an admin bound to a license or the superadmin.
    """

    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("superadmin", "Super Admin"),
    ]

    email = models.EmailField(max_length=254, unique=True)
    name = models.CharField(max_length=255, null=True, blank=True)
    password = models.CharField(max_length=128)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="admin")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "accounts"
        db_table = "users"
        ordering = ["-id"]
        indexes = [
            models.Index(fields=["role"], name="users_role_idx"),
        ]

    def __str__(self):
        return self.email
