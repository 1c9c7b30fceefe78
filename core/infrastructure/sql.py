"""
Helpers for the raw SQL store adapters.

All statements go through Django's connection with ``%s`` placeholders,
so they share the ORM's transaction state and work on every backend
Django supports.
"""
from datetime import datetime, timezone as dt_timezone
from typing import Any, Dict, List, Optional, Sequence

from django.db import connection
from django.utils import dateparse, timezone


def _dictfetchall(cursor) -> List[Dict[str, Any]]:
    columns = [col[0] for col in cursor.description]
    return [dict(zip(columns, row)) for row in cursor.fetchall()]


def fetch_all(sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Run a SELECT and return every row as a dict keyed by column name.

    Args:
        sql: Statement with %s placeholders
        params: Placeholder values

    Returns:
        List of row dicts
    """
    with connection.cursor() as cursor:
        cursor.execute(sql, params)
        return _dictfetchall(cursor)


def fetch_one(sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
    rows = fetch_all(sql, params)
    return rows[0] if rows else None


def execute(sql: str, params: Sequence[Any] = ()) -> int:
    """
    Run a write statement.

    Returns:
        Number of affected rows
    """
    with connection.cursor() as cursor:
        cursor.execute(sql, params)
        return cursor.rowcount


def insert_returning_id(sql: str, params: Sequence[Any] = ()) -> int:
    """
    Run an INSERT and return the new primary key.

    The statement must not carry its own RETURNING clause.
    """
    with connection.cursor() as cursor:
        if connection.features.can_return_columns_from_insert:
            cursor.execute(f"{sql} RETURNING id", params)
            return cursor.fetchone()[0]
        cursor.execute(sql, params)
        return cursor.lastrowid


def lock_clause() -> str:
    """Row-lock suffix for SELECTs, empty where the backend has no row locks."""
    return " FOR UPDATE" if connection.features.has_select_for_update else ""


def to_db_datetime(value: Optional[datetime]):
    """Adapt an aware datetime to the representation the backend stores."""
    if value is None:
        return None
    return connection.ops.adapt_datetimefield_value(value)


def from_db_datetime(value) -> Optional[datetime]:
    """
    Normalize a datetime column read through a raw cursor.

    Backends without timezone support hand back naive UTC values
    (or strings); those are made aware in UTC.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = dateparse.parse_datetime(value)
    if timezone.is_naive(value):
        value = timezone.make_aware(value, dt_timezone.utc)
    return value


def from_db_bool(value) -> bool:
    if isinstance(value, (bytes, bytearray)):
        return value == b"1"
    return bool(value)
