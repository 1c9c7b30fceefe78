"""
Raw SQL implementation of LicenseRepository port.

Uses parameterized statements against the ``licenses`` table through
Django's connection, so it shares the ORM's transactions.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.domain.exceptions import LicenseKeyConflictError
from core.domain.value_objects import LicenseStatus
from core.infrastructure import sql
from licenses.domain.license import License
from licenses.ports.license_repository import ExpiringLicenseRow, LicenseRepository

_LICENSE_COLUMNS = (
    "id, license_key, admin_id, assigned_email, status, is_active, "
    "expiry_date, created_at, updated_at"
)
_ACTIVE_FILTER = "is_active = %s AND status = %s"


class SqlLicenseRepository(LicenseRepository):
    """Parameterized SQL implementation of LicenseRepository."""

    def _to_domain(self, row: Dict[str, Any]) -> License:
        """
        Convert a result row to a domain entity.

        Args:
            row: Column name to value mapping

        Returns:
            License domain entity
        """
        return License(
            id=row["id"],
            license_key=row["license_key"],
            status=LicenseStatus(row["status"]),
            is_active=sql.from_db_bool(row["is_active"]),
            admin_id=row["admin_id"],
            assigned_email=row["assigned_email"],
            expiry_date=sql.from_db_datetime(row["expiry_date"]),
            created_at=sql.from_db_datetime(row["created_at"]),
            updated_at=sql.from_db_datetime(row["updated_at"]),
        )

    def _select(self, where: str = "", params=(), suffix: str = "") -> List[License]:
        statement = f"SELECT {_LICENSE_COLUMNS} FROM licenses"
        if where:
            statement += f" WHERE {where}"
        rows = sql.fetch_all(statement + suffix, params)
        return [self._to_domain(row) for row in rows]

    def _first(self, where: str, params=(), suffix: str = "") -> Optional[License]:
        licenses = self._select(where, params, suffix)
        return licenses[0] if licenses else None

    def create(self, license: License) -> License:
        now = timezone.now()
        try:
            with transaction.atomic():
                license_id = sql.insert_returning_id(
                    "INSERT INTO licenses (license_key, admin_id, assigned_email, status, "
                    "is_active, expiry_date, created_at, updated_at) "
                    "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                    [
                        license.license_key,
                        license.admin_id,
                        license.assigned_email,
                        license.status.value,
                        license.is_active,
                        sql.to_db_datetime(license.expiry_date),
                        sql.to_db_datetime(now),
                        sql.to_db_datetime(now),
                    ],
                )
        except IntegrityError as e:
            raise LicenseKeyConflictError(f"License key {license.license_key} already exists") from e
        return self.find_by_id(license_id)

    def save(self, license: License) -> License:
        sql.execute(
            "UPDATE licenses SET admin_id = %s, assigned_email = %s, status = %s, "
            "is_active = %s, expiry_date = %s, updated_at = %s WHERE id = %s",
            [
                license.admin_id,
                license.assigned_email,
                license.status.value,
                license.is_active,
                sql.to_db_datetime(license.expiry_date),
                sql.to_db_datetime(timezone.now()),
                license.id,
            ],
        )
        return self.find_by_id(license.id)

    def find_by_id(self, license_id: int) -> Optional[License]:
        return self._first("id = %s", [license_id])

    def find_by_key(self, license_key: str, for_update: bool = False) -> Optional[License]:
        lock = sql.lock_clause() if for_update else ""
        return self._first("license_key = %s", [license_key], lock)

    def exists_by_key(self, license_key: str) -> bool:
        row = sql.fetch_one("SELECT 1 AS found FROM licenses WHERE license_key = %s", [license_key])
        return row is not None

    def find_active_by_admin(self, admin_id: int) -> Optional[License]:
        return self._first(
            f"admin_id = %s AND {_ACTIVE_FILTER}",
            [admin_id, True, LicenseStatus.ACTIVE.value],
            " ORDER BY id",
        )

    def find_active_by_assigned_email(self, email: str) -> Optional[License]:
        return self._first(
            f"assigned_email = %s AND {_ACTIVE_FILTER}",
            [email, True, LicenseStatus.ACTIVE.value],
            " ORDER BY id",
        )

    def list_all(self) -> List[License]:
        return self._select(suffix=" ORDER BY created_at DESC, id DESC")

    def list_by_admin(self, admin_id: int) -> List[License]:
        return self._select("admin_id = %s", [admin_id], " ORDER BY created_at DESC, id DESC")

    def find_expiring_between(self, start: datetime, end: datetime) -> List[ExpiringLicenseRow]:
        rows = sql.fetch_all(
            "SELECT l.id, l.license_key, l.expiry_date, u.name, u.email "
            "FROM licenses l JOIN users u ON u.id = l.admin_id "
            "WHERE l.is_active = %s AND l.expiry_date >= %s AND l.expiry_date <= %s "
            "ORDER BY l.expiry_date, l.id",
            [True, sql.to_db_datetime(start), sql.to_db_datetime(end)],
        )
        return [
            ExpiringLicenseRow(
                license_id=row["id"],
                license_key=row["license_key"],
                expiry_date=sql.from_db_datetime(row["expiry_date"]),
                name=row["name"],
                email=row["email"],
            )
            for row in rows
        ]

    def find_overdue(self, now: datetime) -> List[License]:
        return self._select(
            "status = %s AND expiry_date IS NOT NULL AND expiry_date < %s",
            [LicenseStatus.ACTIVE.value, sql.to_db_datetime(now)],
            " ORDER BY id",
        )
