from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Grade, GradeInput
from .repository import GradeRepository

_SELECT = """
    SELECT grade_id, student_id, subject, bimester, grade_value, notes, created_at
    FROM grades
"""


def _row_to_grade(r: dict) -> Grade:
    return Grade(
        grade_id=int(r["grade_id"]),
        student_id=int(r["student_id"]),
        subject=r["subject"],
        bimester=int(r["bimester"]),
        # DECIMAL columns come back as Decimal.
        value=float(r["grade_value"]),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


class MySQLGradeRepository(GradeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_student(self, student_id: int) -> Sequence[Grade]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE student_id=%s ORDER BY subject ASC, bimester ASC", (int(student_id),))
            return [_row_to_grade(r) for r in fetchall(cur)]

    def get_by_id(self, grade_id: int) -> Optional[Grade]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE grade_id=%s", (int(grade_id),))
            r = fetchone(cur)
            return _row_to_grade(r) if r else None

    def find(self, *, student_id: int, subject: str, bimester: int) -> Optional[Grade]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE student_id=%s AND subject=%s AND bimester=%s",
                (int(student_id), subject, int(bimester)),
            )
            r = fetchone(cur)
            return _row_to_grade(r) if r else None

    def create(self, data: GradeInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO grades(student_id, subject, bimester, grade_value, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(data.student_id), data.subject, int(data.bimester), data.value, data.notes),
            )
            return int(cur.lastrowid)

    def delete(self, grade_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM grades WHERE grade_id=%s", (int(grade_id),))
            return cur.rowcount > 0
