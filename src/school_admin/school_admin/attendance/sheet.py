"""In-memory attendance sheet for one (date, shift) chamada.

Each student is in one of four states: unset, Presente, Ausente or
Justificado. Choosing the status a student already has clears it. Only a
Justificado mark may carry a justification; leaving that state drops it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


@dataclass(frozen=True)
class Mark:
    status: Optional[AttendanceStatus] = None
    justification: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return self.status is not None

    @property
    def justification_open(self) -> bool:
        return self.status == AttendanceStatus.JUSTIFIED


UNSET = Mark()


def toggle(mark: Mark, requested: AttendanceStatus) -> Mark:
    """Next mark after the user picks ``requested``."""
    if mark.status == requested:
        return UNSET
    # A new status always starts without justification text.
    return Mark(requested)


def justify(mark: Mark, text: Optional[str]) -> Mark:
    if mark.status != AttendanceStatus.JUSTIFIED:
        raise ValidationError("Justificativa só é permitida para alunos com falta justificada")
    text = (text or "").strip()
    return Mark(mark.status, text or None)


@dataclass(frozen=True)
class SheetEntry:
    student_id: int
    status: AttendanceStatus
    justification: Optional[str] = None


class AttendanceSheet:
    """Keyed collection of marks, student id -> Mark."""

    def __init__(self) -> None:
        self._marks: dict[int, Mark] = {}

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "AttendanceSheet":
        """Rebuild the sheet of an already saved chamada."""
        sheet = cls()
        for r in records:
            sheet._marks[int(r.student_id)] = Mark(
                r.status,
                r.justification if r.status == AttendanceStatus.JUSTIFIED else None,
            )
        return sheet

    def mark_of(self, student_id: int) -> Mark:
        return self._marks.get(int(student_id), UNSET)

    def status_of(self, student_id: int) -> Optional[AttendanceStatus]:
        return self.mark_of(student_id).status

    def toggle(self, student_id: int, status: AttendanceStatus) -> Mark:
        mark = toggle(self.mark_of(student_id), AttendanceStatus(status))
        self._set(student_id, mark)
        return mark

    def justify(self, student_id: int, text: Optional[str]) -> Mark:
        mark = justify(self.mark_of(student_id), text)
        self._set(student_id, mark)
        return mark

    def mark(
        self, student_id: int, status: Optional[AttendanceStatus], justification: Optional[str] = None
    ) -> Mark:
        """Set a mark directly (submitted sheets). Text is kept only for Justificado."""
        mark = Mark(AttendanceStatus(status)) if status else UNSET
        if mark.status == AttendanceStatus.JUSTIFIED:
            mark = justify(mark, justification)
        self._set(student_id, mark)
        return mark

    def _set(self, student_id: int, mark: Mark) -> None:
        if mark.is_set:
            self._marks[int(student_id)] = mark
        else:
            self._marks.pop(int(student_id), None)

    def __iter__(self) -> Iterator[tuple[int, Mark]]:
        return iter(self._marks.items())

    def __len__(self) -> int:
        return len(self._marks)

    def _count(self, status: AttendanceStatus) -> int:
        return sum(1 for m in self._marks.values() if m.status == status)

    @property
    def marked(self) -> int:
        return len(self._marks)

    @property
    def present(self) -> int:
        return self._count(AttendanceStatus.PRESENT)

    @property
    def absent(self) -> int:
        return self._count(AttendanceStatus.ABSENT)

    @property
    def justified(self) -> int:
        return self._count(AttendanceStatus.JUSTIFIED)

    def to_entries(self) -> list[SheetEntry]:
        """Non-unset marks, in the order students were marked."""
        return [
            SheetEntry(
                student_id=student_id,
                status=mark.status,
                justification=mark.justification if mark.status == AttendanceStatus.JUSTIFIED else None,
            )
            for student_id, mark in self._marks.items()
            if mark.is_set
        ]

    def counts(self) -> dict:
        return {
            "marked": self.marked,
            "present": self.present,
            "absent": self.absent,
            "justified": self.justified,
        }
