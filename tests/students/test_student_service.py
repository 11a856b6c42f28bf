from __future__ import annotations

from datetime import date

import pytest

from src.school_admin.school_admin.core.enums import PerformanceIndicator, StudentStatus
from src.school_admin.school_admin.core.exceptions import NotFoundError, ValidationError
from src.school_admin.school_admin.students.service import StudentService, parse_class_id


def test_create_student_with_defaults(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    student = svc.create({"full_name": "  Fernanda Costa ", "shift": "Tarde", "grade": "3º Ano", "birth_date": "2015-04-10"})

    assert student.student_id == 7
    assert student.full_name == "Fernanda Costa"
    assert student.status == StudentStatus.ACTIVE
    assert student.performance_indicator == PerformanceIndicator.NOT_EVALUATED
    assert student.birth_date == date(2015, 4, 10)
    assert student.class_id is None


@pytest.mark.parametrize(
    "payload",
    [
        {"shift": "Manhã", "grade": "4º Ano"},
        {"full_name": "X", "shift": "Noite", "grade": "4º Ano"},
        {"full_name": "X", "shift": "Manhã", "grade": ""},
        {"full_name": "X", "shift": "Manhã", "grade": "4º Ano", "status": "Suspenso"},
        {"full_name": "X", "shift": "Manhã", "grade": "4º Ano", "birth_date": "10/04/2015"},
        {"full_name": "X", "shift": "Manhã", "grade": "4º Ano", "class_id": "abc"},
    ],
)
def test_create_student_rejects_invalid_payload(students_repo, classes_repo, payload):
    svc = StudentService(students_repo, classes_repo)

    with pytest.raises(ValidationError):
        svc.create(payload)


def test_update_merges_with_current_values(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    updated = svc.update(1, {"status": "Inativo", "allergies": "Amendoim"})

    assert updated.full_name == "Bruno Lima"
    assert updated.shift == "Manhã"
    assert updated.status == StudentStatus.INACTIVE
    assert updated.allergies == "Amendoim"


def test_update_and_delete_unknown_student(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    with pytest.raises(NotFoundError):
        svc.update(99, {"full_name": "Ninguém"})
    with pytest.raises(NotFoundError):
        svc.delete(99)


def test_delete_student(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    svc.delete(2)

    with pytest.raises(NotFoundError):
        svc.get(2)


def test_parse_class_id():
    assert parse_class_id(None) is None
    assert parse_class_id("") is None
    assert parse_class_id("3") == 3
    with pytest.raises(ValidationError):
        parse_class_id("turma")


def test_create_rejects_unknown_class(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    with pytest.raises(ValidationError, match="Turma não encontrada"):
        svc.create({"full_name": "X", "shift": "Manhã", "grade": "4º Ano", "class_id": 999})

    assert len(students_repo.list_all()) == 6


def test_update_rejects_unknown_class(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    with pytest.raises(ValidationError, match="Turma não encontrada"):
        svc.update(1, {"class_id": "999"})

    assert svc.get(1).class_id == 1


def test_update_ignores_keys_outside_the_write_model(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    updated = svc.update(2, {"student_id": 40, "created_at": "2020-01-01T00:00:00", "grade": "5º Ano"})

    assert updated.student_id == 2
    assert updated.grade == "5º Ano"
    assert updated.full_name == "Ana Júlia Souza"
    assert students_repo.get_by_id(40) is None


def _guardian(name, **extra):
    return {"full_name": name, "cpf": "123.456.789-00", "relationship": "Mãe", "phone": "(11) 99999-0000", **extra}


def test_create_with_guardians_defaults_first_as_primary(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)

    student = svc.create(
        {
            "full_name": "Fernanda Costa",
            "shift": "Tarde",
            "grade": "3º Ano",
            "guardians": [_guardian("Mariana Costa", email="mari@example.com"), _guardian("Paulo Costa", relationship="Pai")],
        }
    )

    assert [(g.full_name, g.is_primary) for g in student.guardians] == [("Mariana Costa", True), ("Paulo Costa", False)]
    assert student.to_dict()["guardians"][0]["email"] == "mari@example.com"


@pytest.mark.parametrize(
    "guardians",
    [
        {"full_name": "Não é lista"},
        [_guardian("Sem CPF", cpf="")],
        [_guardian("E-mail ruim", email="mariana.example.com")],
        [_guardian("A", is_primary=True), _guardian("B", is_primary="sim")],
    ],
)
def test_create_rejects_invalid_guardians(students_repo, classes_repo, guardians):
    svc = StudentService(students_repo, classes_repo)

    with pytest.raises(ValidationError):
        svc.create({"full_name": "X", "shift": "Manhã", "grade": "4º Ano", "guardians": guardians})


def test_update_keeps_guardians_unless_sent(students_repo, classes_repo):
    svc = StudentService(students_repo, classes_repo)
    svc.update(1, {"guardians": [_guardian("Mariana Souza"), _guardian("Roberto Lima", is_primary=True)]})

    kept = svc.update(1, {"allergies": "Lactose"})
    assert [(g.full_name, g.is_primary) for g in kept.guardians] == [("Roberto Lima", True), ("Mariana Souza", False)]

    cleared = svc.update(1, {"guardians": []})
    assert cleared.guardians == ()
