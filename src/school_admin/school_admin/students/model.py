from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PerformanceIndicator, StudentStatus


@dataclass(frozen=True)
class Guardian:
    """Responsible adult attached to a student."""

    guardian_id: int
    student_id: int
    full_name: str
    cpf: str
    relationship: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    is_primary: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("guardian_id")
        return data


@dataclass(frozen=True)
class GuardianInput:
    full_name: str
    cpf: str
    relationship: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    is_primary: bool = False


@dataclass(frozen=True)
class Student:
    """Domain entity: a student enrolled in the school.

    Pure data object, no DB access.
    """

    student_id: int
    full_name: str
    status: StudentStatus
    shift: str
    grade: str
    class_id: Optional[int] = None
    birth_date: Optional[date] = None
    cpf: str = ""
    address: str = ""
    origin_school: str = ""
    allergies: str = ""
    blood_type: str = ""
    medications: str = ""
    behavior_notes: str = ""
    performance_indicator: PerformanceIndicator = PerformanceIndicator.NOT_EVALUATED
    created_at: Optional[datetime] = None
    guardians: tuple[Guardian, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        data["performance_indicator"] = self.performance_indicator.value
        data["birth_date"] = self.birth_date.isoformat() if self.birth_date else None
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        data["guardians"] = [g.to_dict() for g in self.guardians]
        return data


@dataclass(frozen=True)
class StudentInput:
    """Validated write model for create/update."""

    full_name: str
    status: StudentStatus
    shift: str
    grade: str
    class_id: Optional[int] = None
    birth_date: Optional[date] = None
    cpf: Optional[str] = None
    address: Optional[str] = None
    origin_school: Optional[str] = None
    allergies: Optional[str] = None
    blood_type: Optional[str] = None
    medications: Optional[str] = None
    behavior_notes: Optional[str] = None
    performance_indicator: PerformanceIndicator = PerformanceIndicator.NOT_EVALUATED
    # None leaves the stored guardians untouched; a tuple replaces them.
    guardians: Optional[tuple[GuardianInput, ...]] = None
