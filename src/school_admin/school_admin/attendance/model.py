from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's mark in a chamada."""

    attendance_id: int
    student_id: int
    date: date
    shift: str
    status: AttendanceStatus
    justification: Optional[str] = None
    class_id: Optional[int] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "student_id": self.student_id,
            "date": self.date.isoformat(),
            "shift": self.shift,
            "status": self.status.value,
            "justification": self.justification,
            "class_id": self.class_id,
            "created_date": self.created_at.isoformat() if self.created_at else None,
            "created_by": self.created_by,
        }


@dataclass(frozen=True)
class NewAttendanceRecord:
    """Write model handed to the repository when a call is saved."""

    student_id: int
    date: date
    shift: str
    status: AttendanceStatus
    created_at: datetime
    created_by: str
    justification: Optional[str] = None
    class_id: Optional[int] = None


@dataclass
class AttendanceCall:
    """Read model: every record sharing one (date, shift), with totals.

    Never persisted; rebuilt from records on each read.
    """

    date: date
    shift: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def present(self) -> int:
        return sum(1 for r in self.records if r.status == AttendanceStatus.PRESENT)

    @property
    def absent(self) -> int:
        return sum(1 for r in self.records if r.status == AttendanceStatus.ABSENT)

    @property
    def justified(self) -> int:
        return sum(1 for r in self.records if r.status == AttendanceStatus.JUSTIFIED)

    @property
    def total(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "shift": self.shift,
            "created_by": self.created_by,
            "created_date": self.created_at.isoformat() if self.created_at else None,
            "present": self.present,
            "absent": self.absent,
            "justified": self.justified,
            "total": self.total,
            "records": [r.to_dict() for r in self.records],
        }
