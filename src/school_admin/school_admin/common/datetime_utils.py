from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date_param(value: Optional[str], field_name: str) -> Optional[date]:
    """Parse an optional request date, raising ValidationError on bad input."""
    if not value:
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} inválida (use AAAA-MM-DD)") from None


def parse_hhmm(value: Optional[str], field_name: str) -> Optional[time]:
    if not value:
        return None
    try:
        return datetime.strptime(value.strip()[:5], "%H:%M").time()
    except ValueError:
        raise ValidationError(f"{field_name} inválido (use HH:MM)") from None


def format_hhmm(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_week(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def end_of_week(day: date) -> date:
    """Sunday closing the Monday-start week containing ``day``."""
    return start_of_week(day) + timedelta(days=6)


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the last day of the target month."""
    index = day.month - 1 + months
    year = day.year + index // 12
    month = index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def month_bounds(day: date) -> tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last)
