"""
Expiry date arithmetic.

Expiry dates arrive as date-only strings (``YYYY-MM-DD``) and are stored
as the last second of that day (23:59:59) in the server's local time
zone.
"""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Tuple, Union

from django.utils import dateparse, timezone

from core.domain.exceptions import InvalidExpiryDateError, InvalidInputError

END_OF_DAY = time(23, 59, 59)
MAX_PERIOD_DAYS = 36500


def _local_tz(tz: Optional[tzinfo]) -> tzinfo:
    return tz or timezone.get_current_timezone()


def end_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """
    Return 23:59:59 on ``day`` as an aware datetime.

    Args:
        day: Calendar date
        tz: Time zone (defaults to the active Django time zone)

    Returns:
        Aware datetime
    """
    return timezone.make_aware(datetime.combine(day, END_OF_DAY), _local_tz(tz))


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    return timezone.make_aware(datetime.combine(day, time.min), _local_tz(tz))


def parse_date_value(value: Union[str, date, None], field: str = "expiryDate") -> Optional[date]:
    """
    Parse a date-only value.

    Args:
        value: ``YYYY-MM-DD`` string, a date, or None/blank
        field: Field name used in the error message

    Returns:
        date or None when the value is blank

    Raises:
        InvalidExpiryDateError: If the value is not a valid calendar date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = dateparse.parse_date(text)
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidExpiryDateError(f"Invalid {field} format, expected YYYY-MM-DD")
    return parsed


def parse_expiry_date(
    value: Union[str, date, None], tz: Optional[tzinfo] = None
) -> Optional[datetime]:
    """
    Normalize an expiry input to end of day in local time.

    Args:
        value: ``YYYY-MM-DD`` string, a date, or None/blank for no expiry
        tz: Time zone (defaults to the active Django time zone)

    Returns:
        Aware datetime, or None when no expiry was given
    """
    day = parse_date_value(value)
    return end_of_day(day, tz) if day else None


def parse_period_days(value) -> Optional[int]:
    """
    Parse a license period given in whole days.

    Accepts integers, integral floats such as ``30.0`` and digit strings.

    Raises:
        InvalidInputError: If the value is not an integer between 1 and
            MAX_PERIOD_DAYS
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    message = f"licensePeriodDays must be an integer between 1 and {MAX_PERIOD_DAYS}"
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidInputError(message)
    try:
        days = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidInputError(message) from e
    if not 1 <= days <= MAX_PERIOD_DAYS:
        raise InvalidInputError(message)
    return days


def expiry_from_period(
    start: Optional[date], period_days: int, today: date, tz: Optional[tzinfo] = None
) -> datetime:
    """
    Compute ``start + period_days`` at 23:59:59 local time.

    Args:
        start: First day of the license, or None for today
        period_days: Length of the license in days
        today: Current local date
        tz: Time zone

    Returns:
        Aware expiry datetime

    Raises:
        InvalidInputError: If the result falls outside the supported date range
    """
    try:
        day = (start or today) + timedelta(days=period_days)
    except OverflowError as e:
        raise InvalidInputError("License period ends beyond the supported date range") from e
    return end_of_day(day, tz)


def expiring_window(
    now: datetime, days: int, tz: Optional[tzinfo] = None
) -> Tuple[datetime, datetime]:
    """
    Inclusive window from the start of today to the end of ``today + days``.

    Args:
        now: Current aware datetime
        days: Window length in days
        tz: Time zone

    Returns:
        (start, end) aware datetimes
    """
    today = timezone.localtime(now, _local_tz(tz)).date()
    return start_of_day(today, tz), end_of_day(today + timedelta(days=days), tz)
