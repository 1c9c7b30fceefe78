"""
Raw SQL implementation of AdminRepository port.

Uses parameterized statements against the ``users`` table through
Django's connection, so it shares the ORM's transactions.
"""
from typing import Any, Dict, List, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.domain.admin import Admin
from accounts.ports.admin_repository import AdminLicenseRow, AdminRepository
from core.domain.exceptions import EmailAlreadyRegisteredError
from core.domain.value_objects import Email, UserRole
from core.infrastructure import sql

_ADMIN_COLUMNS = "id, email, name, password, role, is_active, created_at, updated_at"


class SqlAdminRepository(AdminRepository):
    """Parameterized SQL implementation of AdminRepository."""

    def _to_domain(self, row: Dict[str, Any]) -> Admin:
        """
        Convert a result row to a domain entity.

        Args:
            row: Column name to value mapping

        Returns:
            Admin domain entity
        """
        return Admin(
            id=row["id"],
            email=Email(row["email"]),
            password_hash=row["password"],
            role=UserRole.parse(row["role"]),
            is_active=sql.from_db_bool(row["is_active"]),
            name=row["name"],
            created_at=sql.from_db_datetime(row["created_at"]),
            updated_at=sql.from_db_datetime(row["updated_at"]),
        )

    def create(self, admin: Admin) -> Admin:
        now = timezone.now()
        try:
            with transaction.atomic():
                admin_id = sql.insert_returning_id(
                    "INSERT INTO users (email, name, password, role, is_active, created_at, updated_at) "
                    "VALUES (%s, %s, %s, %s, %s, %s, %s)",
                    [
                        str(admin.email),
                        admin.name,
                        admin.password_hash,
                        admin.role.value,
                        admin.is_active,
                        sql.to_db_datetime(now),
                        sql.to_db_datetime(now),
                    ],
                )
        except IntegrityError as e:
            raise EmailAlreadyRegisteredError() from e
        return self.find_by_id(admin_id)

    def save(self, admin: Admin) -> Admin:
        sql.execute(
            "UPDATE users SET name = %s, password = %s, role = %s, is_active = %s, updated_at = %s "
            "WHERE id = %s",
            [
                admin.name,
                admin.password_hash,
                admin.role.value,
                admin.is_active,
                sql.to_db_datetime(timezone.now()),
                admin.id,
            ],
        )
        return self.find_by_id(admin.id)

    def find_by_id(self, admin_id: int) -> Optional[Admin]:
        row = sql.fetch_one(f"SELECT {_ADMIN_COLUMNS} FROM users WHERE id = %s", [admin_id])
        return self._to_domain(row) if row else None

    def find_by_email(self, email: str, for_update: bool = False) -> Optional[Admin]:
        lock = sql.lock_clause() if for_update else ""
        row = sql.fetch_one(f"SELECT {_ADMIN_COLUMNS} FROM users WHERE email = %s{lock}", [email])
        return self._to_domain(row) if row else None

    def exists_by_email(self, email: str) -> bool:
        return sql.fetch_one("SELECT 1 AS found FROM users WHERE email = %s", [email]) is not None

    def list_with_licenses(self) -> List[AdminLicenseRow]:
        rows = sql.fetch_all(
            "SELECT u.id, u.name, u.email, u.is_active, "
            "l.license_key, l.status, l.expiry_date "
            "FROM users u LEFT JOIN licenses l ON l.admin_id = u.id "
            "WHERE u.role = %s "
            "ORDER BY u.id DESC, l.id ASC",
            [UserRole.ADMIN.value],
        )
        return [
            AdminLicenseRow(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                is_active=sql.from_db_bool(row["is_active"]),
                license_key=row["license_key"],
                status=row["status"],
                expiry_date=sql.from_db_datetime(row["expiry_date"]),
            )
            for row in rows
        ]
