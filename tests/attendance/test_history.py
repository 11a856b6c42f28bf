from __future__ import annotations

from datetime import date, datetime

import pytest

from src.school_admin.school_admin.attendance.history import aggregate_calls, history_window, narrow_to_day
from src.school_admin.school_admin.attendance.model import AttendanceRecord
from src.school_admin.school_admin.attendance.service import AttendanceService
from src.school_admin.school_admin.core.enums import AttendanceStatus, HistoryPeriod
from src.school_admin.school_admin.core.exceptions import ValidationError

WEDNESDAY = date(2024, 3, 6)


def _record(rid, student_id, on, status, shift="Manhã"):
    return AttendanceRecord(
        attendance_id=rid,
        student_id=student_id,
        date=on,
        shift=shift,
        status=AttendanceStatus(status),
        created_at=datetime(on.year, on.month, on.day, 7, 30),
        created_by="Prof. Silva",
    )


def test_week_window_starts_on_monday():
    assert history_window(HistoryPeriod.WEEK, WEDNESDAY) == (date(2024, 3, 4), date(2024, 3, 10))


def test_week_window_on_sunday_belongs_to_previous_monday():
    assert history_window("week", date(2024, 3, 10)) == (date(2024, 3, 4), date(2024, 3, 10))


def test_week_window_offset():
    assert history_window("week", WEDNESDAY, -1) == (date(2024, 2, 26), date(2024, 3, 3))
    assert history_window("week", WEDNESDAY, 1) == (date(2024, 3, 11), date(2024, 3, 17))


def test_today_window_and_offset():
    assert history_window("today", WEDNESDAY) == (WEDNESDAY, WEDNESDAY)
    assert history_window("today", WEDNESDAY, -2) == (date(2024, 3, 4), date(2024, 3, 4))


def test_month_window_and_offset():
    assert history_window("month", WEDNESDAY) == (date(2024, 3, 1), date(2024, 3, 31))
    assert history_window("month", WEDNESDAY, -1) == (date(2024, 2, 1), date(2024, 2, 29))
    assert history_window("month", date(2024, 1, 31), -2) == (date(2023, 11, 1), date(2023, 11, 30))


def test_narrow_to_day():
    window = (date(2024, 3, 4), date(2024, 3, 10))

    assert narrow_to_day(window, None) == window
    assert narrow_to_day(window, WEDNESDAY) == (WEDNESDAY, WEDNESDAY)
    assert narrow_to_day(window, date(2024, 3, 11)) is None


def test_aggregate_calls_counts_per_date_and_shift():
    monday = date(2024, 3, 4)
    records = [
        _record(1, 1, monday, "Presente"),
        _record(2, 2, monday, "Presente"),
        _record(3, 3, monday, "Presente"),
        _record(4, 4, monday, "Ausente"),
    ]

    (call,) = aggregate_calls(records)

    assert (call.date, call.shift) == (monday, "Manhã")
    assert (call.present, call.absent, call.justified, call.total) == (3, 1, 0, 4)
    assert call.created_by == "Prof. Silva"


def test_aggregate_calls_order_newest_first_then_shift():
    records = [
        _record(1, 1, date(2024, 3, 4), "Presente"),
        _record(2, 3, WEDNESDAY, "Presente", shift="Tarde"),
        _record(3, 1, WEDNESDAY, "Ausente"),
        _record(4, 2, date(2024, 3, 5), "Justificado"),
    ]

    calls = aggregate_calls(records)

    assert [(c.date, c.shift) for c in calls] == [
        (WEDNESDAY, "Manhã"),
        (WEDNESDAY, "Tarde"),
        (date(2024, 3, 5), "Manhã"),
        (date(2024, 3, 4), "Manhã"),
    ]


def test_aggregate_calls_filters_shift():
    records = [_record(1, 1, WEDNESDAY, "Presente"), _record(2, 3, WEDNESDAY, "Presente", shift="Tarde")]

    assert [c.shift for c in aggregate_calls(records, "Tarde")] == ["Tarde"]


def test_aggregate_calls_empty():
    assert aggregate_calls([]) == []


def test_service_history_applies_window_and_day(attendance_repo, students_repo, classes_repo):
    attendance_repo.records = [
        _record(1, 1, date(2024, 3, 4), "Presente"),
        _record(2, 2, WEDNESDAY, "Ausente"),
        _record(3, 1, WEDNESDAY, "Presente"),
        _record(4, 1, date(2024, 3, 12), "Presente"),
        _record(5, 3, WEDNESDAY, "Presente", shift="Tarde"),
    ]
    svc = AttendanceService(attendance_repo, students_repo, classes_repo)
    start, end = svc.resolve_window(period="week", anchor=WEDNESDAY)

    week = svc.history_calls(shift="Manhã", start=start, end=end)
    only_wednesday = svc.history(shift="Manhã", start=start, end=end, day=WEDNESDAY)
    outside = svc.history(shift="Manhã", start=start, end=end, day=date(2024, 3, 12))

    assert [(c.date, c.total) for c in week] == [(WEDNESDAY, 2), (date(2024, 3, 4), 1)]
    assert {r.attendance_id for r in only_wednesday} == {2, 3}
    assert outside == []


def test_service_history_rejects_inverted_range(attendance_repo, students_repo, classes_repo):
    svc = AttendanceService(attendance_repo, students_repo, classes_repo)

    with pytest.raises(ValidationError):
        svc.history(shift="Manhã", start=date(2024, 3, 10), end=date(2024, 3, 4))
    with pytest.raises(ValidationError):
        svc.resolve_window(period="year", anchor=WEDNESDAY)
