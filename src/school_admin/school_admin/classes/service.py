from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_choice, require_enum, require_non_empty, require_positive_int
from ..core.constants import DEFAULT_SHIFTS, WEEK_DAYS
from ..core.enums import ClassStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logger import get_logger
from ..students.repository import StudentRepository
from .model import ClassInput, ClassItem
from .repository import ClassRepository

logger = get_logger(__name__)


def ensure_class_exists(classes: ClassRepository, class_id: Optional[int]) -> None:
    """Reject references to a turma that is not stored (None means no turma)."""
    if class_id is not None and classes.get_by_id(int(class_id)) is None:
        raise ValidationError("Turma não encontrada")


class ClassService:
    """Use case: manage turmas and report how many students each one holds."""

    def __init__(
        self,
        classes: ClassRepository,
        students: StudentRepository,
        *,
        shifts: Sequence[str] = DEFAULT_SHIFTS,
    ):
        self._classes = classes
        self._students = students
        self._shifts = tuple(shifts)

    def list_with_counts(self) -> list[tuple[ClassItem, int]]:
        counts = self._students.count_by_class()
        return [(c, counts.get(c.class_id, 0)) for c in self._classes.list_all()]

    def get(self, class_id: int) -> ClassItem:
        item = self._classes.get_by_id(int(class_id))
        if not item:
            raise NotFoundError("Turma não encontrada")
        return item

    def student_count(self, class_id: int) -> int:
        return self._students.count_by_class().get(int(class_id), 0)

    def create(self, payload: Mapping[str, Any]) -> ClassItem:
        data = self._validate(payload)
        class_id = self._classes.create(data)
        logger.info("Class %s created (%s)", class_id, data.name)
        return self.get(class_id)

    def update(self, class_id: int, payload: Mapping[str, Any]) -> ClassItem:
        current = self.get(class_id)
        merged = {**current.to_dict(), **dict(payload)}
        self._classes.update(current.class_id, self._validate(merged))
        return self.get(current.class_id)

    def delete(self, class_id: int) -> None:
        self.get(class_id)
        if not self._classes.delete(int(class_id)):
            raise ValidationError("Falha ao excluir turma")
        logger.info("Class %s deleted", class_id)

    def _validate(self, payload: Mapping[str, Any]) -> ClassInput:
        days = payload.get("days_of_week") or []
        if not isinstance(days, list):
            raise ValidationError("Dias da semana devem ser uma lista")
        days = [require_choice(d, "Dia da semana", WEEK_DAYS) for d in days]
        # Keep weekday order and drop repeats.
        days = [d for d in WEEK_DAYS if d in days]

        start_time = parse_hhmm(payload.get("start_time"), "Horário de início")
        end_time = parse_hhmm(payload.get("end_time"), "Horário de término")
        if start_time and end_time and start_time >= end_time:
            raise ValidationError("Horário de início deve ser anterior ao término")

        return ClassInput(
            name=require_non_empty(payload.get("name"), "Nome da turma"),
            shift=require_choice(payload.get("shift"), "Turno", self._shifts),
            status=require_enum(payload.get("status") or ClassStatus.ACTIVE, "Status", ClassStatus),
            max_students=require_positive_int(payload.get("max_students", 15), "Máximo de alunos"),
            days_of_week=days,
            start_time=start_time,
            end_time=end_time,
        )
