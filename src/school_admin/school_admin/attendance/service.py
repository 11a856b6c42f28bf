from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..classes.repository import ClassRepository
from ..classes.service import ensure_class_exists
from ..common.datetime_utils import now_local
from ..common.validators import require_choice, require_enum
from ..core.constants import DEFAULT_CURRENT_USER_LABEL, DEFAULT_SHIFTS
from ..core.enums import AttendanceStatus, HistoryPeriod
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logger import get_logger
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.roster import filter_roster
from .history import aggregate_calls, history_window, narrow_to_day
from .model import AttendanceCall, AttendanceRecord, NewAttendanceRecord
from .repository import AttendanceRepository
from .sheet import AttendanceSheet

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChamadaView:
    """Roster of a (date, shift) plus the sheet rebuilt from saved records."""

    date: date
    shift: str
    class_id: Optional[int]
    roster: list[Student]
    sheet: AttendanceSheet

    def to_dict(self) -> dict:
        students = []
        for s in self.roster:
            mark = self.sheet.mark_of(s.student_id)
            students.append(
                {
                    "student_id": s.student_id,
                    "full_name": s.full_name,
                    "grade": s.grade,
                    "class_id": s.class_id,
                    "status": mark.status.value if mark.status else None,
                    "justification": mark.justification,
                    "justification_open": mark.justification_open,
                }
            )
        return {
            "date": self.date.isoformat(),
            "shift": self.shift,
            "class_id": self.class_id,
            "total_students": len(self.roster),
            "counts": self.sheet.counts(),
            "students": students,
        }


class AttendanceService:
    """Use cases of the chamada screen: load, save (bulk replace) and history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        *,
        shifts: Sequence[str] = DEFAULT_SHIFTS,
        current_user_label: str = DEFAULT_CURRENT_USER_LABEL,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._shifts = tuple(shifts)
        self._current_user_label = current_user_label

    def _shift(self, shift: str) -> str:
        return require_choice(shift, "Turno", self._shifts)

    def list_by_date_shift(self, *, on: date, shift: str, class_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_date_shift(on=on, shift=self._shift(shift), class_id=class_id)

    def load_call(self, *, on: date, shift: str, class_id: Optional[int] = None) -> ChamadaView:
        shift = self._shift(shift)
        roster = filter_roster(self._students.list_all(), shift, class_id)
        # The sheet is keyed by (date, shift) only, like the saved call.
        existing = self._attendance.list_by_date_shift(on=on, shift=shift)
        return ChamadaView(date=on, shift=shift, class_id=class_id, roster=roster, sheet=AttendanceSheet.from_records(existing))

    def build_sheet(self, entries: Sequence[Mapping[str, Any]]) -> AttendanceSheet:
        """Sheet from submitted entries; entries without status are dropped."""
        sheet = AttendanceSheet()
        seen: set[int] = set()
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise ValidationError("Registro de presença inválido")
            try:
                student_id = int(entry.get("student_id"))
            except (TypeError, ValueError):
                raise ValidationError(f"Aluno inválido: {entry.get('student_id')!r}") from None
            if student_id in seen:
                raise ValidationError(f"Aluno {student_id} aparece mais de uma vez na chamada")
            seen.add(student_id)

            raw_status = entry.get("status")
            if not raw_status:
                continue
            status = require_enum(raw_status, "Status", AttendanceStatus)
            sheet.mark(student_id, status, entry.get("justification"))
        return sheet

    def save_call(
        self,
        *,
        on: date,
        shift: str,
        entries: Sequence[Mapping[str, Any]],
        class_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        """Replace the whole (on, shift) call with the marked entries.

        Every record previously saved for that date and shift is discarded,
        including students missing from ``entries``. Last write wins.
        """
        shift = self._shift(shift)
        ensure_class_exists(self._classes, class_id)
        sheet = self.build_sheet(entries)
        marked = sheet.to_entries()

        ids = [e.student_id for e in marked]
        known = {s.student_id for s in self._students.get_many(ids)} if ids else set()
        missing = sorted(set(ids) - known)
        if missing:
            raise ValidationError(f"Alunos não encontrados: {', '.join(str(i) for i in missing)}")

        stamp = now or now_local()
        records = [
            NewAttendanceRecord(
                student_id=e.student_id,
                date=on,
                shift=shift,
                status=e.status,
                justification=e.justification,
                class_id=class_id,
                created_at=stamp,
                created_by=self._current_user_label,
            )
            for e in marked
        ]

        saved = self._attendance.replace_call(on=on, shift=shift, records=records)
        logger.info(
            "Chamada %s/%s saved: %d records (%d present, %d absent, %d justified)",
            on.isoformat(),
            shift,
            len(saved),
            sheet.present,
            sheet.absent,
            sheet.justified,
        )
        return saved

    def resolve_window(
        self,
        *,
        period: HistoryPeriod | str,
        anchor: date,
        offset: int = 0,
        day: Optional[date] = None,
    ) -> Optional[tuple[date, date]]:
        period = require_enum(period, "Período", HistoryPeriod)
        return narrow_to_day(history_window(period, anchor, offset), day)

    def history(
        self,
        *,
        shift: str,
        start: date,
        end: date,
        class_id: Optional[int] = None,
        day: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        if start > end:
            raise ValidationError("Data inicial deve ser anterior à data final")
        shift = self._shift(shift)
        window = narrow_to_day((start, end), day)
        if window is None:
            return []
        return self._attendance.list_range(start=window[0], end=window[1], shift=shift, class_id=class_id)

    def history_calls(
        self,
        *,
        shift: str,
        start: date,
        end: date,
        class_id: Optional[int] = None,
        day: Optional[date] = None,
    ) -> list[AttendanceCall]:
        records = self.history(shift=shift, start=start, end=end, class_id=class_id, day=day)
        return aggregate_calls(records, shift)

    def list_by_student(
        self, *, student_id: int, start: Optional[date] = None, end: Optional[date] = None
    ) -> Sequence[AttendanceRecord]:
        if not self._students.get_by_id(int(student_id)):
            raise NotFoundError("Aluno não encontrado")
        return self._attendance.list_by_student(student_id=int(student_id), start=start, end=end)
