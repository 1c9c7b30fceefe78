"""
Django implementation of AdminRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List, Optional

from django.db import IntegrityError, transaction

from accounts.domain.admin import Admin
from accounts.infrastructure.models import Admin as AdminModel
from accounts.ports.admin_repository import AdminLicenseRow, AdminRepository
from core.domain.exceptions import EmailAlreadyRegisteredError
from core.domain.value_objects import Email, UserRole


class DjangoAdminRepository(AdminRepository):
    """Django ORM implementation of AdminRepository."""

    def _to_domain(self, model: AdminModel) -> Admin:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Admin model

        Returns:
            Admin domain entity
        """
        return Admin(
            id=model.id,
            email=Email(model.email),
            password_hash=model.password,
            role=UserRole.parse(model.role),
            is_active=model.is_active,
            name=model.name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def create(self, admin: Admin) -> Admin:
        """
        Insert a new admin.

        Args:
            admin: Admin entity without an id

        Returns:
            Admin entity with its store-assigned id
        """
        try:
            with transaction.atomic():
                model = AdminModel.objects.create(
                    email=str(admin.email),
                    name=admin.name,
                    password=admin.password_hash,
                    role=admin.role.value,
                    is_active=admin.is_active,
                )
        except IntegrityError as e:
            raise EmailAlreadyRegisteredError() from e
        return self._to_domain(model)

    def save(self, admin: Admin) -> Admin:
        model = AdminModel.objects.get(id=admin.id)
        model.name = admin.name
        model.password = admin.password_hash
        model.role = admin.role.value
        model.is_active = admin.is_active
        model.save(update_fields=["name", "password", "role", "is_active", "updated_at"])
        return self._to_domain(model)

    def find_by_id(self, admin_id: int) -> Optional[Admin]:
        try:
            return self._to_domain(AdminModel.objects.get(id=admin_id))
        except AdminModel.DoesNotExist:
            return None

    def find_by_email(self, email: str, for_update: bool = False) -> Optional[Admin]:
        queryset = AdminModel.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        model = queryset.filter(email=email).first()
        return self._to_domain(model) if model else None

    def exists_by_email(self, email: str) -> bool:
        return AdminModel.objects.filter(email=email).exists()

    def list_with_licenses(self) -> List[AdminLicenseRow]:
        """
        List role=admin accounts left-joined with their licenses.

        Returns:
            One row per admin/license pair; admins without a license
            appear once with empty license columns
        """
        rows = []
        admins = (
            AdminModel.objects.filter(role=UserRole.ADMIN.value)
            .prefetch_related("licenses")
            .order_by("-id")
        )
        for admin in admins:
            licenses = sorted(admin.licenses.all(), key=lambda item: item.id)
            if not licenses:
                rows.append(
                    AdminLicenseRow(
                        id=admin.id,
                        name=admin.name,
                        email=admin.email,
                        is_active=admin.is_active,
                        license_key=None,
                        status=None,
                        expiry_date=None,
                    )
                )
                continue
            for license in licenses:
                rows.append(
                    AdminLicenseRow(
                        id=admin.id,
                        name=admin.name,
                        email=admin.email,
                        is_active=admin.is_active,
                        license_key=license.license_key,
                        status=license.status,
                        expiry_date=license.expiry_date,
                    )
                )
        return rows
