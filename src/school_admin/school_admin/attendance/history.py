"""Chamada history: date windows and (date, shift) aggregation."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import add_months, end_of_week, month_bounds, start_of_week
from ..core.enums import HistoryPeriod
from .model import AttendanceCall, AttendanceRecord


def history_window(period: HistoryPeriod | str, anchor: date, offset: int = 0) -> tuple[date, date]:
    """Inclusive (start, end) of the window containing ``anchor``.

    ``offset`` navigates whole windows backwards (negative) or forwards.
    Weeks start on Monday.
    """
    period = HistoryPeriod(period)
    if period == HistoryPeriod.TODAY:
        day = anchor + timedelta(days=offset)
        return day, day
    if period == HistoryPeriod.WEEK:
        monday = start_of_week(anchor) + timedelta(weeks=offset)
        return monday, end_of_week(monday)
    return month_bounds(add_months(anchor.replace(day=1), offset))


def narrow_to_day(window: tuple[date, date], day: Optional[date]) -> Optional[tuple[date, date]]:
    """Restrict ``window`` to ``day``; None when the day falls outside it."""
    if day is None:
        return window
    start, end = window
    if not (start <= day <= end):
        return None
    return day, day


def aggregate_calls(records: Iterable[AttendanceRecord], shift: Optional[str] = None) -> list[AttendanceCall]:
    """Group records by (date, shift), newest date first."""
    calls: dict[tuple[date, str], AttendanceCall] = {}
    for r in records:
        if shift is not None and r.shift != shift:
            continue
        key = (r.date, r.shift)
        call = calls.get(key)
        if call is None:
            call = AttendanceCall(date=r.date, shift=r.shift, created_by=r.created_by, created_at=r.created_at)
            calls[key] = call
        call.records.append(r)

    ordered = sorted(calls.values(), key=lambda c: c.shift)
    return sorted(ordered, key=lambda c: c.date, reverse=True)
