from __future__ import annotations

from dataclasses import asdict, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.school_admin.school_admin.announcements.model import Announcement, AnnouncementInput
from src.school_admin.school_admin.attendance.model import AttendanceRecord, NewAttendanceRecord
from src.school_admin.school_admin.classes.model import ClassInput, ClassItem
from src.school_admin.school_admin.container import wire_container
from src.school_admin.school_admin.core.enums import AttendanceStatus, ClassStatus, StudentStatus
from src.school_admin.school_admin.events.model import CalendarEvent, EventInput
from src.school_admin.school_admin.grades.model import Grade, GradeInput
from src.school_admin.school_admin.main import create_app
from src.school_admin.school_admin.students.model import Guardian, Student, StudentInput


class InMemoryStudents:
    def __init__(self, students=()):
        self._by_id: dict[int, Student] = {s.student_id: s for s in students}
        self._id = max(self._by_id, default=0)
        self.guardians: dict[int, list[Guardian]] = {}
        self._guardian_id = 0

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda s: s.full_name)

    def list_guardians(self, student_id: int):
        return sorted(self.guardians.get(int(student_id), []), key=lambda g: (not g.is_primary, g.guardian_id))

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._by_id.get(int(student_id))

    def get_many(self, student_ids):
        return [self._by_id[i] for i in {int(i) for i in student_ids} if i in self._by_id]

    def create(self, data: StudentInput) -> int:
        self._id += 1
        self._by_id[self._id] = self._from_input(self._id, data)
        self._store_guardians(self._id, data)
        return self._id

    def update(self, student_id: int, data: StudentInput) -> bool:
        if student_id not in self._by_id:
            return False
        self._by_id[student_id] = self._from_input(student_id, data)
        self._store_guardians(student_id, data)
        return True

    def delete(self, student_id: int) -> bool:
        self.guardians.pop(int(student_id), None)
        return self._by_id.pop(int(student_id), None) is not None

    def _store_guardians(self, student_id: int, data: StudentInput) -> None:
        if data.guardians is None:
            return
        stored = []
        for g in data.guardians:
            self._guardian_id += 1
            stored.append(Guardian(guardian_id=self._guardian_id, student_id=student_id, **asdict(g)))
        self.guardians[student_id] = stored

    def count_by_class(self) -> dict[int, int]:
        counts: dict[int, int] = {}
        for s in self._by_id.values():
            if s.class_id is not None:
                counts[s.class_id] = counts.get(s.class_id, 0) + 1
        return counts

    @staticmethod
    def _from_input(student_id: int, data: StudentInput) -> Student:
        return Student(
            student_id=student_id,
            full_name=data.full_name,
            status=data.status,
            shift=data.shift,
            grade=data.grade,
            class_id=data.class_id,
            birth_date=data.birth_date,
            cpf=data.cpf or "",
            address=data.address or "",
            origin_school=data.origin_school or "",
            allergies=data.allergies or "",
            blood_type=data.blood_type or "",
            medications=data.medications or "",
            behavior_notes=data.behavior_notes or "",
            performance_indicator=data.performance_indicator,
        )


class InMemoryAttendance:
    def __init__(self, records=()):
        self.records: list[AttendanceRecord] = list(records)
        self._id = max((r.attendance_id for r in self.records), default=0)
        self.fail_next_replace = False
        self.replace_calls = 0

    def list_by_date_shift(self, *, on: date, shift: str, class_id=None):
        return [
            r
            for r in self.records
            if r.date == on and r.shift == shift and (class_id is None or r.class_id == class_id)
        ]

    def list_range(self, *, start: date, end: date, shift=None, class_id=None):
        items = [
            r
            for r in self.records
            if start <= r.date <= end
            and (shift is None or r.shift == shift)
            and (class_id is None or r.class_id == class_id)
        ]
        return sorted(items, key=lambda r: r.date, reverse=True)

    def list_by_student(self, *, student_id: int, start=None, end=None):
        items = [
            r
            for r in self.records
            if r.student_id == student_id
            and (start is None or r.date >= start)
            and (end is None or r.date <= end)
        ]
        return sorted(items, key=lambda r: r.date, reverse=True)

    def replace_call(self, *, on: date, shift: str, records: list[NewAttendanceRecord]):
        self.replace_calls += 1
        if self.fail_next_replace:
            self.fail_next_replace = False
            raise RuntimeError("database unavailable")

        kept = [r for r in self.records if not (r.date == on and r.shift == shift)]
        saved = []
        for rec in records:
            self._id += 1
            saved.append(
                AttendanceRecord(
                    attendance_id=self._id,
                    student_id=rec.student_id,
                    date=rec.date,
                    shift=rec.shift,
                    status=rec.status,
                    justification=rec.justification,
                    class_id=rec.class_id,
                    created_at=rec.created_at,
                    created_by=rec.created_by,
                )
            )
        self.records = kept + saved
        return saved


class InMemoryClasses:
    def __init__(self, classes=()):
        self._by_id: dict[int, ClassItem] = {c.class_id: c for c in classes}
        self._id = max(self._by_id, default=0)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda c: c.name)

    def get_by_id(self, class_id: int):
        return self._by_id.get(int(class_id))

    def create(self, data: ClassInput) -> int:
        self._id += 1
        self._by_id[self._id] = ClassItem(class_id=self._id, **data.__dict__)
        return self._id

    def update(self, class_id: int, data: ClassInput) -> bool:
        current = self._by_id.get(class_id)
        if not current:
            return False
        self._by_id[class_id] = replace(current, **data.__dict__)
        return True

    def delete(self, class_id: int) -> bool:
        return self._by_id.pop(int(class_id), None) is not None


class InMemoryEvents:
    def __init__(self, events=()):
        self._by_id: dict[int, CalendarEvent] = {e.event_id: e for e in events}
        self._id = max(self._by_id, default=0)

    def list_range(self, *, start=None, end=None):
        items = [
            e
            for e in self._by_id.values()
            if (start is None or e.date >= start) and (end is None or e.date <= end)
        ]
        return sorted(items, key=lambda e: (e.date, e.start_time is not None, e.start_time or datetime.min.time()))

    def get_by_id(self, event_id: int):
        return self._by_id.get(int(event_id))

    def create(self, data: EventInput) -> int:
        self._id += 1
        self._by_id[self._id] = CalendarEvent(event_id=self._id, **data.__dict__)
        return self._id

    def update(self, event_id: int, data: EventInput) -> bool:
        if event_id not in self._by_id:
            return False
        self._by_id[event_id] = CalendarEvent(event_id=event_id, **data.__dict__)
        return True

    def delete(self, event_id: int) -> bool:
        return self._by_id.pop(int(event_id), None) is not None


class InMemoryAnnouncements:
    def __init__(self, items=()):
        self._by_id: dict[int, Announcement] = {a.announcement_id: a for a in items}
        self._id = max(self._by_id, default=0)

    def list_all(self, *, include_inactive: bool = False):
        items = [a for a in self._by_id.values() if include_inactive or a.is_active]
        return sorted(items, key=lambda a: (a.date, a.announcement_id), reverse=True)

    def get_by_id(self, announcement_id: int):
        return self._by_id.get(int(announcement_id))

    def create(self, data: AnnouncementInput) -> int:
        self._id += 1
        self._by_id[self._id] = Announcement(announcement_id=self._id, **data.__dict__)
        return self._id

    def update(self, announcement_id: int, data: AnnouncementInput) -> bool:
        if announcement_id not in self._by_id:
            return False
        self._by_id[announcement_id] = Announcement(announcement_id=announcement_id, **data.__dict__)
        return True

    def delete(self, announcement_id: int) -> bool:
        return self._by_id.pop(int(announcement_id), None) is not None


class InMemoryGrades:
    def __init__(self, grades=()):
        self._by_id: dict[int, Grade] = {g.grade_id: g for g in grades}
        self._id = max(self._by_id, default=0)

    def list_by_student(self, student_id: int):
        items = [g for g in self._by_id.values() if g.student_id == int(student_id)]
        return sorted(items, key=lambda g: (g.subject, g.bimester))

    def get_by_id(self, grade_id: int):
        return self._by_id.get(int(grade_id))

    def find(self, *, student_id: int, subject: str, bimester: int):
        for g in self._by_id.values():
            if (g.student_id, g.subject, g.bimester) == (int(student_id), subject, int(bimester)):
                return g
        return None

    def create(self, data: GradeInput) -> int:
        self._id += 1
        self._by_id[self._id] = Grade(grade_id=self._id, created_at=datetime(2024, 3, 6, 8, 0), **data.__dict__)
        return self._id

    def delete(self, grade_id: int) -> bool:
        return self._by_id.pop(int(grade_id), None) is not None


def make_student(student_id, full_name, *, shift="Manhã", class_id=1, status=StudentStatus.ACTIVE, grade="4º Ano"):
    return Student(
        student_id=student_id,
        full_name=full_name,
        status=status,
        shift=shift,
        grade=grade,
        class_id=class_id,
    )


def make_record(attendance_id, student_id, on, status, *, shift="Manhã", justification=None, class_id=1):
    return AttendanceRecord(
        attendance_id=attendance_id,
        student_id=student_id,
        date=on,
        shift=shift,
        status=AttendanceStatus(status),
        justification=justification,
        class_id=class_id,
        created_at=datetime.combine(on, datetime.min.time()).replace(hour=7, minute=30),
        created_by="Prof. Silva",
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 6, 7, 45, 0)


@pytest.fixture
def sample_students():
    return [
        make_student(1, "Bruno Lima"),
        make_student(2, "Ana Júlia Souza"),
        make_student(3, "Carlos Eduardo", shift="Tarde", class_id=2, grade="5º Ano"),
        make_student(4, "Daniela Alves", shift="Tarde", class_id=2, grade="5º Ano"),
        make_student(5, "Eduardo Martins", status=StudentStatus.INACTIVE),
        make_student(6, "Álvaro Reis", class_id=3),
    ]


@pytest.fixture
def students_repo(sample_students):
    return InMemoryStudents(sample_students)


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def classes_repo():
    return InMemoryClasses(
        [
            ClassItem(class_id=1, name="Turma A - Reforço", shift="Manhã", status=ClassStatus.ACTIVE, max_students=15),
            ClassItem(class_id=2, name="Turma B - Reforço", shift="Tarde", status=ClassStatus.ACTIVE, max_students=15),
            ClassItem(class_id=3, name="Turma C - Antiga", shift="Manhã", status=ClassStatus.INACTIVE, max_students=10),
        ]
    )


@pytest.fixture
def events_repo():
    return InMemoryEvents()


@pytest.fixture
def announcements_repo():
    return InMemoryAnnouncements()


@pytest.fixture
def grades_repo():
    return InMemoryGrades()


@pytest.fixture
def container(students_repo, classes_repo, attendance_repo, events_repo, announcements_repo, grades_repo):
    return wire_container(
        students_repo=students_repo,
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        events_repo=events_repo,
        announcements_repo=announcements_repo,
        grades_repo=grades_repo,
    )


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
