from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_CURRENT_USER_LABEL, DEFAULT_SHIFTS, DEFAULT_UPCOMING_EVENTS_LIMIT
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .grades.mysql_grade_repository import MySQLGradeRepository
from .grades.repository import GradeRepository
from .grades.service import GradeService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    classes_repo: ClassRepository
    attendance_repo: AttendanceRepository
    events_repo: EventRepository
    announcements_repo: AnnouncementRepository
    grades_repo: GradeRepository

    student_service: StudentService
    class_service: ClassService
    attendance_service: AttendanceService
    event_service: EventService
    announcement_service: AnnouncementService
    grade_service: GradeService
    dashboard_service: DashboardService


def wire_container(
    *,
    students_repo: StudentRepository,
    classes_repo: ClassRepository,
    attendance_repo: AttendanceRepository,
    events_repo: EventRepository,
    announcements_repo: AnnouncementRepository,
    grades_repo: GradeRepository,
    shifts: Sequence[str] = DEFAULT_SHIFTS,
    current_user_label: str = DEFAULT_CURRENT_USER_LABEL,
    upcoming_limit: int = DEFAULT_UPCOMING_EVENTS_LIMIT,
) -> Container:
    """Build services on top of any repository implementation (MySQL or in-memory)."""
    event_service = EventService(events_repo)
    return Container(
        students_repo=students_repo,
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        events_repo=events_repo,
        announcements_repo=announcements_repo,
        grades_repo=grades_repo,
        student_service=StudentService(students_repo, classes_repo, shifts=shifts),
        class_service=ClassService(classes_repo, students_repo, shifts=shifts),
        attendance_service=AttendanceService(
            attendance_repo,
            students_repo,
            classes_repo,
            shifts=shifts,
            current_user_label=current_user_label,
        ),
        event_service=event_service,
        announcement_service=AnnouncementService(announcements_repo),
        grade_service=GradeService(grades_repo, students_repo),
        dashboard_service=DashboardService(
            students=students_repo,
            classes=classes_repo,
            attendance=attendance_repo,
            events=event_service,
            announcements=announcements_repo,
            upcoming_limit=upcoming_limit,
        ),
    )


def build_container(
    *,
    db_config: Mapping,
    shifts: Sequence[str] = DEFAULT_SHIFTS,
    current_user_label: str = DEFAULT_CURRENT_USER_LABEL,
    upcoming_limit: int = DEFAULT_UPCOMING_EVENTS_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_container(
        students_repo=MySQLStudentRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        events_repo=MySQLEventRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        grades_repo=MySQLGradeRepository(conn),
        shifts=shifts,
        current_user_label=current_user_label,
        upcoming_limit=upcoming_limit,
    )
