"""
Django management command to mark overdue licenses as expired.

This command should be run periodically (e.g., via cron or scheduled task).
"""

from django.core.management.base import BaseCommand, CommandError

from api.dependencies import get_lifecycle_service


class Command(BaseCommand):
    """Command to expire overdue licenses."""

    help = "Mark active licenses whose expiry date has passed as expired"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        result = get_lifecycle_service().expire_overdue_licenses(dry_run=dry_run)
        if not result.ok:
            raise CommandError(result.message)

        licenses = result.data
        self.stdout.write(f"Found {len(licenses)} overdue license(s)")
        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for license in licenses:
                self.stdout.write(f"  - License {license.id} expired at {license.expiry_date}")
            return

        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"Successfully marked {len(licenses)} license(s) as expired")
        )
