"""Timezone-aware clock helpers."""

from datetime import date, datetime
from typing import Optional

import pytz

from erp_console.config import get_settings


def get_timezone() -> pytz.BaseTzInfo:
    return pytz.timezone(get_settings().TIMEZONE)


def now() -> datetime:
    """Current instant in the configured timezone."""
    return datetime.now(get_timezone())


def ensure_aware(value: Optional[datetime | date]) -> Optional[datetime]:
    """Localize naive datetimes (and plain dates at midnight) to the configured zone."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        return get_timezone().localize(value)
    return value


def within(value: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    """Inclusive range check; naive bounds are read in the configured zone."""
    if start and value < ensure_aware(start):
        return False
    if end and value > ensure_aware(end):
        return False
    return True
