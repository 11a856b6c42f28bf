from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Grade, GradeInput


class GradeRepository(Protocol):
    def list_by_student(self, student_id: int) -> Sequence[Grade]:
        """Ordered by subject, then bimester."""

        raise NotImplementedError

    def get_by_id(self, grade_id: int) -> Optional[Grade]:
        raise NotImplementedError

    def find(self, *, student_id: int, subject: str, bimester: int) -> Optional[Grade]:
        raise NotImplementedError

    def create(self, data: GradeInput) -> int:
        raise NotImplementedError

    def delete(self, grade_id: int) -> bool:
        raise NotImplementedError
