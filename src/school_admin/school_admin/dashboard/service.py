from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..announcements.repository import AnnouncementRepository
from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.datetime_utils import end_of_week, start_of_week
from ..core.constants import CHART_WEEK_DAYS, DEFAULT_UPCOMING_EVENTS_LIMIT
from ..core.enums import AttendanceStatus, ClassStatus
from ..events.service import EventService
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class DashboardData:
    active_students: int
    total_students: int
    active_classes: int
    present_today: int
    absent_today: int
    weekly_chart: list[dict]
    upcoming_events: list[dict]
    announcements: list[dict]

    def to_dict(self) -> dict:
        return {
            "active_students": self.active_students,
            "total_students": self.total_students,
            "active_classes": self.active_classes,
            "present_today": self.present_today,
            "absent_today": self.absent_today,
            "weekly_chart": self.weekly_chart,
            "upcoming_events": self.upcoming_events,
            "announcements": self.announcements,
        }


class DashboardService:
    """Read-only summary shown on the home screen."""

    def __init__(
        self,
        *,
        students: StudentRepository,
        classes: ClassRepository,
        attendance: AttendanceRepository,
        events: EventService,
        announcements: AnnouncementRepository,
        upcoming_limit: int = DEFAULT_UPCOMING_EVENTS_LIMIT,
    ):
        self._students = students
        self._classes = classes
        self._attendance = attendance
        self._events = events
        self._announcements = announcements
        self._upcoming_limit = int(upcoming_limit)

    def summary(self, *, today: Optional[date] = None) -> DashboardData:
        today = today or date.today()

        students = self._students.list_all()
        classes = self._classes.list_all()

        week = self._attendance.list_range(start=start_of_week(today), end=end_of_week(today))
        todays = [r for r in week if r.date == today]

        # Monday..Friday columns; weekend records are not charted.
        chart = [{"name": label, "presentes": 0, "ausentes": 0} for label in CHART_WEEK_DAYS]
        for r in week:
            weekday = r.date.weekday()
            if weekday >= len(chart):
                continue
            if r.status == AttendanceStatus.PRESENT:
                chart[weekday]["presentes"] += 1
            elif r.status == AttendanceStatus.ABSENT:
                chart[weekday]["ausentes"] += 1

        upcoming = self._events.upcoming(today=today, limit=self._upcoming_limit)

        return DashboardData(
            active_students=sum(1 for s in students if s.is_active),
            total_students=len(students),
            active_classes=sum(1 for c in classes if c.status == ClassStatus.ACTIVE),
            present_today=sum(1 for r in todays if r.status == AttendanceStatus.PRESENT),
            absent_today=sum(1 for r in todays if r.status == AttendanceStatus.ABSENT),
            weekly_chart=chart,
            upcoming_events=[e.to_dict() for e in upcoming],
            announcements=[a.to_dict() for a in self._announcements.list_all(include_inactive=False)],
        )
