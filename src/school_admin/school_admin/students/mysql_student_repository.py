from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PerformanceIndicator, StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Guardian, GuardianInput, Student, StudentInput
from .repository import StudentRepository

_COLUMNS = """
    student_id, full_name, status, shift, grade, class_id, birth_date, cpf, address,
    origin_school, allergies, blood_type, medications, behavior_notes,
    performance_indicator, created_at
"""


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        full_name=r["full_name"],
        status=StudentStatus(r["status"]),
        shift=r["shift"],
        grade=r["grade"],
        class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
        birth_date=r.get("birth_date"),
        cpf=r.get("cpf") or "",
        address=r.get("address") or "",
        origin_school=r.get("origin_school") or "",
        allergies=r.get("allergies") or "",
        blood_type=r.get("blood_type") or "",
        medications=r.get("medications") or "",
        behavior_notes=r.get("behavior_notes") or "",
        performance_indicator=PerformanceIndicator(r.get("performance_indicator") or PerformanceIndicator.NOT_EVALUATED.value),
        created_at=r.get("created_at"),
    )


def _row_to_guardian(r: dict) -> Guardian:
    return Guardian(
        guardian_id=int(r["guardian_id"]),
        student_id=int(r["student_id"]),
        full_name=r["full_name"],
        cpf=r["cpf"],
        relationship=r["relationship"],
        phone=r["phone"],
        email=r.get("email"),
        address=r.get("address"),
        notes=r.get("notes"),
        is_primary=bool(r.get("is_primary")),
    )


def _replace_guardians(cur, student_id: int, guardians: Sequence[GuardianInput]) -> None:
    cur.execute("DELETE FROM guardians WHERE student_id=%s", (student_id,))
    for g in guardians:
        cur.execute(
            """
            INSERT INTO guardians(student_id, full_name, cpf, relationship, phone, email, address, notes, is_primary)
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (student_id, g.full_name, g.cpf, g.relationship, g.phone, g.email, g.address, g.notes, int(g.is_primary)),
        )


def _params(data: StudentInput) -> tuple:
    return (
        data.full_name,
        data.status.value,
        data.shift,
        data.grade,
        data.class_id,
        data.birth_date,
        data.cpf,
        data.address,
        data.origin_school,
        data.allergies,
        data.blood_type,
        data.medications,
        data.behavior_notes,
        data.performance_indicator.value,
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY full_name")
            return [_row_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def get_many(self, student_ids: Sequence[int]) -> Sequence[Student]:
        ids = sorted({int(i) for i in student_ids})
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id IN ({placeholders})", tuple(ids))
            return [_row_to_student(r) for r in fetchall(cur)]

    def list_guardians(self, student_id: int) -> Sequence[Guardian]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT guardian_id, student_id, full_name, cpf, relationship, phone, email, address, notes, is_primary
                FROM guardians
                WHERE student_id=%s
                ORDER BY is_primary DESC, guardian_id ASC
                """,
                (int(student_id),),
            )
            return [_row_to_guardian(r) for r in fetchall(cur)]

    def create(self, data: StudentInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(
                    full_name, status, shift, grade, class_id, birth_date, cpf, address,
                    origin_school, allergies, blood_type, medications, behavior_notes,
                    performance_indicator
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(data),
            )
            student_id = int(cur.lastrowid)
            if data.guardians is not None:
                _replace_guardians(cur, student_id, data.guardians)
            return student_id

    def update(self, student_id: int, data: StudentInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET full_name=%s, status=%s, shift=%s, grade=%s, class_id=%s, birth_date=%s,
                    cpf=%s, address=%s, origin_school=%s, allergies=%s, blood_type=%s,
                    medications=%s, behavior_notes=%s, performance_indicator=%s
                WHERE student_id=%s
                """,
                (*_params(data), int(student_id)),
            )
            updated = cur.rowcount > 0
            if data.guardians is not None:
                _replace_guardians(cur, int(student_id), data.guardians)
            return updated

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0

    def count_by_class(self) -> dict[int, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, COUNT(*) AS total
                FROM students
                WHERE class_id IS NOT NULL
                GROUP BY class_id
                """
            )
            return {int(r["class_id"]): int(r["total"]) for r in fetchall(cur)}
