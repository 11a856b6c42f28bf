from __future__ import annotations

import pytest

from src.school_admin.school_admin.core.enums import StudentStatus
from src.school_admin.school_admin.core.exceptions import ValidationError
from src.school_admin.school_admin.students.model import Student
from src.school_admin.school_admin.students.roster import filter_roster, name_sort_key
from src.school_admin.school_admin.students.service import StudentService


def _student(student_id, name, *, shift="Manhã", class_id=1, active=True):
    return Student(
        student_id=student_id,
        full_name=name,
        status=StudentStatus.ACTIVE if active else StudentStatus.INACTIVE,
        shift=shift,
        grade="4º Ano",
        class_id=class_id,
    )


def test_filter_roster_keeps_active_students_of_shift_sorted_by_name():
    students = [
        _student(1, "Bruno"),
        _student(2, "Ana"),
        _student(3, "Carla", shift="Tarde"),
        _student(4, "Diego", active=False),
    ]

    roster = filter_roster(students, "Manhã")

    assert [s.full_name for s in roster] == ["Ana", "Bruno"]


def test_filter_roster_by_class():
    students = [_student(1, "Ana", class_id=1), _student(2, "Bia", class_id=2)]

    assert [s.student_id for s in filter_roster(students, "Manhã", 2)] == [2]
    assert [s.student_id for s in filter_roster(students, "Manhã", "2")] == [2]


@pytest.mark.parametrize("class_id", [None, "", "all"])
def test_filter_roster_without_class_filter(class_id):
    students = [_student(1, "Ana", class_id=1), _student(2, "Bia", class_id=2), _student(3, "Caio", class_id=None)]

    assert len(filter_roster(students, "Manhã", class_id)) == 3


def test_filter_roster_unknown_shift_is_empty():
    assert filter_roster([_student(1, "Ana")], "Noite") == []


def test_name_sort_ignores_accents_and_case():
    names = ["bruno", "Álvaro", "Ana", "Éder", "carla"]

    assert sorted(names, key=name_sort_key) == ["Álvaro", "Ana", "bruno", "carla", "Éder"]


def test_service_roster_rejects_unknown_shift(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    with pytest.raises(ValidationError):
        svc.roster(shift="Noite")


def test_service_roster_uses_repository_students(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    roster = svc.roster(shift="Manhã", class_id="all")

    # Eduardo is inactive; Álvaro sorts before Ana.
    assert [s.full_name for s in roster] == ["Álvaro Reis", "Ana Júlia Souza", "Bruno Lima"]


def test_service_roster_rejects_non_numeric_class(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    with pytest.raises(ValidationError):
        svc.roster(shift="Manhã", class_id="abc")
