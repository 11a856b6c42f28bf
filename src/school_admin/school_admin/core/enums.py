from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status of one student in a chamada."""

    PRESENT = "Presente"
    ABSENT = "Ausente"
    JUSTIFIED = "Justificado"


class StudentStatus(str, Enum):
    ACTIVE = "Ativo"
    INACTIVE = "Inativo"


class PerformanceIndicator(str, Enum):
    IMPROVING = "Melhorando"
    ATTENTION = "Atenção"
    DECLINING = "Decaindo"
    NOT_EVALUATED = "Não avaliado"


class ClassStatus(str, Enum):
    ACTIVE = "Ativa"
    INACTIVE = "Inativa"


class EventType(str, Enum):
    SPECIAL_CLASS = "Aula Especial"
    MEETING = "Reunião"
    EXAM = "Prova"
    EVENT = "Evento"
    HOLIDAY = "Feriado"
    OTHER = "Outro"


class AnnouncementPriority(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class HistoryPeriod(str, Enum):
    """Time windows offered by the chamada history tab."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
