from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendanceRecord


class AttendanceRepository(Protocol):
    def list_by_date_shift(
        self, *, on: date, shift: str, class_id: Optional[int] = None
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start: date,
        end: date,
        shift: Optional[str] = None,
        class_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_student(
        self, *, student_id: int, start: Optional[date] = None, end: Optional[date] = None
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def replace_call(
        self, *, on: date, shift: str, records: Sequence[NewAttendanceRecord]
    ) -> Sequence[AttendanceRecord]:
        """Delete every record of (on, shift) and insert ``records``, atomically.

        Returns the inserted records.
        """

        raise NotImplementedError
