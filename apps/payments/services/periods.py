"""Calendar helpers bound to the configured reporting timezone."""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone


def reporting_timezone():
    return ZoneInfo(settings.PAYMENTS_REPORTING_TIMEZONE)


def local_datetime(value: datetime) -> datetime:
    """Convert an aware datetime into the reporting timezone."""
    return timezone.localtime(value, reporting_timezone())


def local_date(value: datetime) -> date:
    return local_datetime(value).date()


def day_start(day: date) -> datetime:
    """Aware datetime at local midnight of ``day``."""
    return datetime.combine(day, time.min, tzinfo=reporting_timezone())


def day_bounds(day: date):
    """
    Half-open bounds of a calendar day in the reporting timezone.

    Returns:
        Tuple (start, next_start) so that start <= created_at < next_start
    """
    return day_start(day), day_start(day + timedelta(days=1))
