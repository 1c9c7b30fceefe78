import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("license_key", models.CharField(max_length=64, unique=True)),
                ("assigned_email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("unused", "Unused"), ("active", "Active"), ("expired", "Expired")],
                        default="unused",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("expiry_date", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "admin",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="licenses",
                        to="accounts.admin",
                    ),
                ),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["admin", "is_active", "status"], name="licenses_admin_state_idx"),
                    models.Index(fields=["assigned_email"], name="licenses_email_idx"),
                    models.Index(fields=["expiry_date"], name="licenses_expiry_idx"),
                ],
            },
        ),
    ]
