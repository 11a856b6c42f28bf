from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Mapping, Optional, Sequence

from ..classes.repository import ClassRepository
from ..classes.service import ensure_class_exists
from ..common.datetime_utils import parse_date_param
from ..common.validators import optional_text, parse_bool, require_choice, require_enum, require_non_empty
from ..core.constants import ALL_CLASSES, DEFAULT_SHIFTS
from ..core.enums import PerformanceIndicator, StudentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logger import get_logger
from .model import GuardianInput, Student, StudentInput
from .repository import StudentRepository
from .roster import filter_roster

logger = get_logger(__name__)

_TEXT_FIELDS = (
    "cpf",
    "address",
    "origin_school",
    "allergies",
    "blood_type",
    "medications",
    "behavior_notes",
)

# Stored columns an update may carry over; guardians are replaced only on request.
_MERGE_FIELDS = tuple(f.name for f in fields(StudentInput) if f.name != "guardians")


def parse_class_id(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Turma inválida: {value!r}") from None


def parse_guardians(value: Any) -> tuple[GuardianInput, ...]:
    """Validate the ``guardians`` list of a student payload.

    At most one guardian may be primary. When none is flagged, the first one is.
    """
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValidationError("Responsáveis devem ser uma lista")

    guardians = []
    for item in value:
        if not isinstance(item, Mapping):
            raise ValidationError("Responsável inválido")
        email = optional_text(item.get("email"))
        if email and "@" not in email:
            raise ValidationError(f"E-mail do responsável inválido: {email!r}")
        guardians.append(
            GuardianInput(
                full_name=require_non_empty(item.get("full_name"), "Nome do responsável"),
                cpf=require_non_empty(item.get("cpf"), "CPF do responsável"),
                relationship=require_non_empty(item.get("relationship"), "Parentesco"),
                phone=require_non_empty(item.get("phone"), "Telefone do responsável"),
                email=email,
                address=optional_text(item.get("address")),
                notes=optional_text(item.get("notes")),
                is_primary=parse_bool(item.get("is_primary"), default=False),
            )
        )

    primaries = sum(1 for g in guardians if g.is_primary)
    if primaries > 1:
        raise ValidationError("Apenas um responsável pode ser o principal")
    if guardians and primaries == 0:
        guardians[0] = replace(guardians[0], is_primary=True)
    return tuple(guardians)


class StudentService:
    """Use case: manage students and build shift rosters."""

    def __init__(
        self,
        students: StudentRepository,
        classes: ClassRepository,
        *,
        shifts: Sequence[str] = DEFAULT_SHIFTS,
    ):
        self._students = students
        self._classes = classes
        self._shifts = tuple(shifts)

    def list(self) -> Sequence[Student]:
        return self._students.list_all()

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Aluno não encontrado")
        return replace(student, guardians=tuple(self._students.list_guardians(student.student_id)))

    def roster(self, *, shift: str, class_id: Optional[int | str] = None) -> list[Student]:
        shift = require_choice(shift, "Turno", self._shifts)
        wanted = None if class_id in (None, "", ALL_CLASSES) else parse_class_id(class_id)
        return filter_roster(self._students.list_all(), shift, wanted)

    def create(self, payload: Mapping[str, Any]) -> Student:
        data = self._validate(payload)
        student_id = self._students.create(data)
        logger.info("Student %s created (%s)", student_id, data.full_name)
        return self.get(student_id)

    def update(self, student_id: int, payload: Mapping[str, Any]) -> Student:
        current = self.get(student_id)
        stored = current.to_dict()
        merged: dict[str, Any] = {name: stored[name] for name in _MERGE_FIELDS}
        merged.update({k: v for k, v in payload.items() if k in _MERGE_FIELDS or k == "guardians"})
        self._students.update(current.student_id, self._validate(merged))
        return self.get(current.student_id)

    def delete(self, student_id: int) -> None:
        self.get(student_id)
        if not self._students.delete(int(student_id)):
            raise ValidationError("Falha ao excluir aluno")
        logger.info("Student %s deleted", student_id)

    def _validate(self, payload: Mapping[str, Any]) -> StudentInput:
        indicator = payload.get("performance_indicator") or PerformanceIndicator.NOT_EVALUATED
        class_id = parse_class_id(payload.get("class_id"))
        ensure_class_exists(self._classes, class_id)
        return StudentInput(
            full_name=require_non_empty(payload.get("full_name"), "Nome completo"),
            status=require_enum(payload.get("status") or StudentStatus.ACTIVE, "Status", StudentStatus),
            shift=require_choice(payload.get("shift"), "Turno", self._shifts),
            grade=require_non_empty(payload.get("grade"), "Série"),
            class_id=class_id,
            birth_date=parse_date_param(payload.get("birth_date"), "Data de nascimento"),
            performance_indicator=require_enum(indicator, "Indicador de desempenho", PerformanceIndicator),
            guardians=parse_guardians(payload["guardians"]) if "guardians" in payload else None,
            **{field: optional_text(payload.get(field)) for field in _TEXT_FIELDS},
        )
