from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def coerce_date(value: Union[date, str, None], field_name: str) -> date:
    """Accept a date or an ISO string, raising ValidationError otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return parse_iso_date(value.strip())
        except ValueError:
            raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")
    raise ValidationError(f"{field_name} is required")


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def today_local() -> date:
    """Current local calendar date.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now().date()


def inclusive_day_span(start: date, end: date) -> int:
    """Number of calendar days from start to end, counting both endpoints."""
    return (end - start).days + 1
