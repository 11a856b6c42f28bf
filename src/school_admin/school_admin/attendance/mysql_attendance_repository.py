from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, where_clause
from .model import AttendanceRecord, NewAttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, student_id, date, shift, status, justification,
           class_id, created_at, created_by
    FROM attendance_records
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        date=r["date"],
        shift=r["shift"],
        status=AttendanceStatus(r["status"]),
        justification=r.get("justification"),
        class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
        created_at=r.get("created_at"),
        created_by=r.get("created_by"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, clauses: list[str], params: list[object], order: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where_clause(clauses)} ORDER BY {order}", tuple(params))
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_by_date_shift(
        self, *, on: date, shift: str, class_id: Optional[int] = None
    ) -> Sequence[AttendanceRecord]:
        clauses = ["date=%s", "shift=%s"]
        params: list[object] = [on, shift]
        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))
        return self._select(clauses, params, "attendance_id ASC")

    def list_range(
        self,
        *,
        start: date,
        end: date,
        shift: Optional[str] = None,
        class_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if shift is not None:
            clauses.append("shift=%s")
            params.append(shift)
        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))
        return self._select(clauses, params, "date DESC, attendance_id ASC")

    def list_by_student(
        self, *, student_id: int, start: Optional[date] = None, end: Optional[date] = None
    ) -> Sequence[AttendanceRecord]:
        clauses = ["student_id=%s"]
        params: list[object] = [int(student_id)]
        if start is not None:
            clauses.append("date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("date <= %s")
            params.append(end)
        return self._select(clauses, params, "date DESC, shift ASC")

    def replace_call(
        self, *, on: date, shift: str, records: Sequence[NewAttendanceRecord]
    ) -> Sequence[AttendanceRecord]:
        saved: list[AttendanceRecord] = []
        # One transaction: the old call is gone only if every new row is written.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE date=%s AND shift=%s", (on, shift))
            for rec in records:
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        student_id, date, shift, status, justification, class_id, created_at, created_by
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(rec.student_id),
                        rec.date,
                        rec.shift,
                        rec.status.value,
                        rec.justification,
                        rec.class_id,
                        rec.created_at,
                        rec.created_by,
                    ),
                )
                saved.append(
                    AttendanceRecord(
                        attendance_id=int(cur.lastrowid),
                        student_id=int(rec.student_id),
                        date=rec.date,
                        shift=rec.shift,
                        status=rec.status,
                        justification=rec.justification,
                        class_id=rec.class_id,
                        created_at=rec.created_at,
                        created_by=rec.created_by,
                    )
                )
        return saved
