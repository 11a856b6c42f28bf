from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import ClassStatus


@dataclass(frozen=True)
class ClassItem:
    """Domain entity: a class (turma) of the school."""

    class_id: int
    name: str
    shift: str
    status: ClassStatus
    max_students: int
    days_of_week: list[str] = field(default_factory=list)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    created_at: Optional[datetime] = None

    def to_dict(self, *, student_count: Optional[int] = None) -> dict:
        data = {
            "id": self.class_id,
            "name": self.name,
            "shift": self.shift,
            "days_of_week": list(self.days_of_week),
            "start_time": format_hhmm(self.start_time),
            "end_time": format_hhmm(self.end_time),
            "status": self.status.value,
            "max_students": self.max_students,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if student_count is not None:
            data["student_count"] = student_count
        return data


@dataclass(frozen=True)
class ClassInput:
    name: str
    shift: str
    status: ClassStatus
    max_students: int
    days_of_week: list[str] = field(default_factory=list)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
