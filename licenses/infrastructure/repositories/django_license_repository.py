"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional

from django.db import IntegrityError, transaction

from core.domain.exceptions import LicenseKeyConflictError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import ExpiringLicenseRow, LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Translates unique-key violations into domain conflicts
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            license_key=model.license_key,
            status=LicenseStatus(model.status),
            is_active=model.is_active,
            admin_id=model.admin_id,
            assigned_email=model.assigned_email,
            expiry_date=model.expiry_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def create(self, license: License) -> License:
        """
        Insert a new license.

        The insert runs in a savepoint so a key conflict leaves the
        caller's transaction usable for the next attempt.
        """
        try:
            with transaction.atomic():
                model = LicenseModel.objects.create(
                    license_key=license.license_key,
                    admin_id=license.admin_id,
                    assigned_email=license.assigned_email,
                    status=license.status.value,
                    is_active=license.is_active,
                    expiry_date=license.expiry_date,
                )
        except IntegrityError as e:
            raise LicenseKeyConflictError(f"License key {license.license_key} already exists") from e
        return self._to_domain(model)

    def save(self, license: License) -> License:
        model = LicenseModel.objects.get(id=license.id)
        model.admin_id = license.admin_id
        model.assigned_email = license.assigned_email
        model.status = license.status.value
        model.is_active = license.is_active
        model.expiry_date = license.expiry_date
        model.save(
            update_fields=[
                "admin",
                "assigned_email",
                "status",
                "is_active",
                "expiry_date",
                "updated_at",
            ]
        )
        return self._to_domain(model)

    def find_by_id(self, license_id: int) -> Optional[License]:
        try:
            return self._to_domain(LicenseModel.objects.get(id=license_id))
        except LicenseModel.DoesNotExist:
            return None

    def find_by_key(self, license_key: str, for_update: bool = False) -> Optional[License]:
        queryset = LicenseModel.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        model = queryset.filter(license_key=license_key).first()
        return self._to_domain(model) if model else None

    def exists_by_key(self, license_key: str) -> bool:
        return LicenseModel.objects.filter(license_key=license_key).exists()

    def find_active_by_admin(self, admin_id: int) -> Optional[License]:
        model = LicenseModel.objects.filter(
            admin_id=admin_id, is_active=True, status=LicenseStatus.ACTIVE.value
        ).first()
        return self._to_domain(model) if model else None

    def find_active_by_assigned_email(self, email: str) -> Optional[License]:
        model = LicenseModel.objects.filter(
            assigned_email=email, is_active=True, status=LicenseStatus.ACTIVE.value
        ).first()
        return self._to_domain(model) if model else None

    def list_all(self) -> List[License]:
        return [self._to_domain(model) for model in LicenseModel.objects.order_by("-created_at", "-id")]

    def list_by_admin(self, admin_id: int) -> List[License]:
        models = LicenseModel.objects.filter(admin_id=admin_id).order_by("-created_at", "-id")
        return [self._to_domain(model) for model in models]

    def find_expiring_between(self, start: datetime, end: datetime) -> List[ExpiringLicenseRow]:
        """
        Find owned, switched-on licenses expiring inside an inclusive window.

        Args:
            start: Window start
            end: Window end

        Returns:
            Rows joined with the owning admin, soonest expiry first
        """
        models = (
            LicenseModel.objects.select_related("admin")
            .filter(
                admin__isnull=False,
                is_active=True,
                expiry_date__gte=start,
                expiry_date__lte=end,
            )
            .order_by("expiry_date", "id")
        )
        return [
            ExpiringLicenseRow(
                license_id=model.id,
                license_key=model.license_key,
                expiry_date=model.expiry_date,
                name=model.admin.name,
                email=model.admin.email,
            )
            for model in models
        ]

    def find_overdue(self, now: datetime) -> List[License]:
        models = LicenseModel.objects.filter(
            status=LicenseStatus.ACTIVE.value, expiry_date__lt=now
        ).order_by("id")
        return [self._to_domain(model) for model in models]
