from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_text, require_choice
from ..core.constants import BIMESTERS, GRADE_SUBJECTS, MAX_GRADE_VALUE
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logger import get_logger
from ..students.repository import StudentRepository
from .model import Grade, GradeInput
from .repository import GradeRepository

logger = get_logger(__name__)


def parse_bimester(value: Any) -> int:
    try:
        bimester = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Bimestre inválido: {value!r}") from None
    if bimester not in BIMESTERS:
        raise ValidationError("Bimestre deve estar entre 1 e 4")
    return bimester


def parse_grade_value(value: Any) -> float:
    """Grade between 0 and 10; a decimal comma is accepted ("7,5")."""
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError("Nota é obrigatória")
    try:
        number = float(str(value).strip().replace(",", "."))
    except ValueError:
        raise ValidationError(f"Nota inválida: {value!r}") from None
    if not 0 <= number <= MAX_GRADE_VALUE:
        raise ValidationError("Nota deve estar entre 0 e 10")
    return round(number, 2)


def _average(values: Sequence[float]) -> Optional[float]:
    return round(sum(values) / len(values), 1) if values else None


class GradeService:
    """Use case: bimester grades of a student and the report card built from them."""

    def __init__(self, grades: GradeRepository, students: StudentRepository):
        self._grades = grades
        self._students = students

    def _student_id(self, student_id: int) -> int:
        if not self._students.get_by_id(int(student_id)):
            raise NotFoundError("Aluno não encontrado")
        return int(student_id)

    def list_by_student(self, student_id: int) -> Sequence[Grade]:
        return self._grades.list_by_student(self._student_id(student_id))

    def create(self, student_id: int, payload: Mapping[str, Any]) -> Grade:
        data = GradeInput(
            student_id=self._student_id(student_id),
            subject=require_choice(payload.get("subject"), "Disciplina", GRADE_SUBJECTS),
            bimester=parse_bimester(payload.get("bimester")),
            value=parse_grade_value(payload.get("grade")),
            notes=optional_text(payload.get("notes")),
        )
        if self._grades.find(student_id=data.student_id, subject=data.subject, bimester=data.bimester):
            raise ValidationError(f"Já existe nota de {data.subject} no {data.bimester}º bimestre")

        grade_id = self._grades.create(data)
        logger.info("Grade %s created (student %s, %s b%s)", grade_id, data.student_id, data.subject, data.bimester)
        grade = self._grades.get_by_id(grade_id)
        if not grade:
            raise NotFoundError("Nota não encontrada")
        return grade

    def delete(self, student_id: int, grade_id: int) -> None:
        grade = self._grades.get_by_id(int(grade_id))
        if not grade or grade.student_id != self._student_id(student_id):
            raise NotFoundError("Nota não encontrada")
        if not self._grades.delete(grade.grade_id):
            raise ValidationError("Falha ao excluir nota")

    def report(self, student_id: int) -> dict:
        """Boletim: one row per subject with its four bimesters and average.

        Subjects without grades are omitted. The overall average is taken
        over every grade, not over the subject averages.
        """
        grades = self.list_by_student(student_id)
        rows = []
        for subject in GRADE_SUBJECTS:
            by_bimester = {g.bimester: g.value for g in grades if g.subject == subject}
            if not by_bimester:
                continue
            rows.append(
                {
                    "subject": subject,
                    "bimesters": [by_bimester.get(b) for b in BIMESTERS],
                    "average": _average(list(by_bimester.values())),
                }
            )
        return {
            "student_id": int(student_id),
            "average": _average([g.value for g in grades]),
            "subjects": rows,
        }
