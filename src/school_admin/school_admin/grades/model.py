from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Grade:
    """Domain entity: one bimester grade of a student in a subject."""

    grade_id: int
    student_id: int
    subject: str
    bimester: int
    value: float
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.grade_id,
            "student_id": self.student_id,
            "subject": self.subject,
            "bimester": self.bimester,
            "grade": self.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class GradeInput:
    student_id: int
    subject: str
    bimester: int
    value: float
    notes: Optional[str] = None
