from __future__ import annotations

from datetime import time

import pytest

from src.school_admin.school_admin.classes.service import ClassService
from src.school_admin.school_admin.core.enums import ClassStatus
from src.school_admin.school_admin.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def svc(classes_repo, students_repo):
    return ClassService(classes_repo, students_repo)


def test_list_with_counts(svc):
    counts = {item.name: count for item, count in svc.list_with_counts()}

    assert counts == {"Turma A - Reforço": 3, "Turma B - Reforço": 2, "Turma C - Antiga": 1}


def test_create_class_orders_weekdays(svc):
    item = svc.create(
        {
            "name": "Turma D",
            "shift": "Tarde",
            "days_of_week": ["Sexta", "Segunda", "Quarta", "Segunda"],
            "start_time": "14:00",
            "end_time": "16:30",
            "max_students": "12",
        }
    )

    assert item.days_of_week == ["Segunda", "Quarta", "Sexta"]
    assert item.start_time == time(14, 0)
    assert item.end_time == time(16, 30)
    assert item.max_students == 12
    assert item.status == ClassStatus.ACTIVE
    assert item.to_dict(student_count=0)["student_count"] == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"shift": "Manhã"},
        {"name": "T", "shift": "Noite"},
        {"name": "T", "shift": "Manhã", "days_of_week": ["Sábado"]},
        {"name": "T", "shift": "Manhã", "days_of_week": "Segunda"},
        {"name": "T", "shift": "Manhã", "start_time": "10:00", "end_time": "09:00"},
        {"name": "T", "shift": "Manhã", "max_students": 0},
        {"name": "T", "shift": "Manhã", "status": "Arquivada"},
    ],
)
def test_create_class_rejects_invalid_payload(svc, payload):
    with pytest.raises(ValidationError):
        svc.create(payload)


def test_update_class_keeps_unchanged_fields(svc):
    updated = svc.update(2, {"status": "Inativa"})

    assert updated.name == "Turma B - Reforço"
    assert updated.shift == "Tarde"
    assert updated.status == ClassStatus.INACTIVE


def test_delete_unknown_class(svc):
    with pytest.raises(NotFoundError):
        svc.delete(42)


def test_student_count(svc):
    assert svc.student_count(2) == 2
    assert svc.student_count(42) == 0
