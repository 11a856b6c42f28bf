from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Guardian, Student, StudentInput


class StudentRepository(Protocol):
    """Repository interface for students.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_many(self, student_ids: Sequence[int]) -> Sequence[Student]:
        raise NotImplementedError

    def list_guardians(self, student_id: int) -> Sequence[Guardian]:
        raise NotImplementedError

    def create(self, data: StudentInput) -> int:
        """Insert the student and, when given, its guardians in one transaction."""

        raise NotImplementedError

    def update(self, student_id: int, data: StudentInput) -> bool:
        """Update the student; ``data.guardians`` (when not None) replaces the stored list."""

        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError

    def count_by_class(self) -> dict[int, int]:
        """Number of students referencing each class id."""

        raise NotImplementedError
