from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ClassStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list, normalize_mysql_time
from .model import ClassInput, ClassItem
from .repository import ClassRepository

_SELECT = """
    SELECT class_id, name, shift, days_of_week, start_time, end_time, status,
           max_students, created_at
    FROM classes
"""


def _row_to_class(r: dict) -> ClassItem:
    return ClassItem(
        class_id=int(r["class_id"]),
        name=r["name"],
        shift=r["shift"],
        status=ClassStatus(r["status"]),
        max_students=int(r["max_students"]),
        days_of_week=load_json_list(r.get("days_of_week")),
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        created_at=r.get("created_at"),
    )


def _params(data: ClassInput) -> tuple:
    return (
        data.name,
        data.shift,
        dump_json_list(data.days_of_week),
        data.start_time,
        data.end_time,
        data.status.value,
        int(data.max_students),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ClassItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY name")
            return [_row_to_class(r) for r in fetchall(cur)]

    def get_by_id(self, class_id: int) -> Optional[ClassItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return _row_to_class(r) if r else None

    def create(self, data: ClassInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO classes(name, shift, days_of_week, start_time, end_time, status, max_students)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(data),
            )
            return int(cur.lastrowid)

    def update(self, class_id: int, data: ClassInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE classes
                SET name=%s, shift=%s, days_of_week=%s, start_time=%s, end_time=%s,
                    status=%s, max_students=%s
                WHERE class_id=%s
                """,
                (*_params(data), int(class_id)),
            )
            return cur.rowcount > 0

    def delete(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0
