"""
Django management command to create the superadmin account.

The superadmin is the only account that can issue licenses and manage
admins; it is never created through the API.
"""

import logging
import os

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError

from accounts.domain.admin import Admin
from accounts.infrastructure.repositories.django_admin_repository import DjangoAdminRepository
from core.domain.exceptions import EmailAlreadyRegisteredError
from core.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to create the superadmin account."""

    help = "Create a superadmin account"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("--email", type=str, required=True, help="Superadmin email")
        parser.add_argument(
            "--password",
            type=str,
            default=None,
            help="Superadmin password (default: SUPERADMIN_PASSWORD environment variable)",
        )
        parser.add_argument("--name", type=str, default=None, help="Display name")

    def handle(self, *args, **options):
        """Execute the command."""
        email = options["email"].strip()
        password = options["password"] or os.environ.get("SUPERADMIN_PASSWORD")
        if not password:
            raise CommandError("A password is required (--password or SUPERADMIN_PASSWORD)")

        try:
            admin = Admin.create(
                email=email,
                password_hash=make_password(password),
                name=options["name"],
                role=UserRole.SUPERADMIN,
            )
        except ValueError as e:
            raise CommandError(str(e)) from e

        try:
            created = DjangoAdminRepository().create(admin)
        except EmailAlreadyRegisteredError as e:
            raise CommandError(f"An account with email {email} already exists") from e

        logger.info("Superadmin %s created", created.id, extra={"admin_id": created.id})
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created superadmin {email} (id {created.id})"))
