from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, where_clause
from .model import CalendarEvent, EventInput
from .repository import EventRepository

_SELECT = """
    SELECT event_id, title, description, event_type, date, start_time, end_time, color
    FROM events
"""


def _row_to_event(r: dict) -> CalendarEvent:
    return CalendarEvent(
        event_id=int(r["event_id"]),
        title=r["title"],
        event_type=EventType(r["event_type"]),
        date=r["date"],
        description=r.get("description"),
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        color=r.get("color"),
    )


def _params(data: EventInput) -> tuple:
    return (
        data.title,
        data.description,
        data.event_type.value,
        data.date,
        data.start_time,
        data.end_time,
        data.color,
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[CalendarEvent]:
        clauses: list[str] = []
        params: list[object] = []
        if start is not None:
            clauses.append("date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("date <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where_clause(clauses)} ORDER BY date ASC, start_time ASC", tuple(params))
            return [_row_to_event(r) for r in fetchall(cur)]

    def get_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE event_id=%s", (int(event_id),))
            r = fetchone(cur)
            return _row_to_event(r) if r else None

    def create(self, data: EventInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(title, description, event_type, date, start_time, end_time, color)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(data),
            )
            return int(cur.lastrowid)

    def update(self, event_id: int, data: EventInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET title=%s, description=%s, event_type=%s, date=%s, start_time=%s, end_time=%s, color=%s
                WHERE event_id=%s
                """,
                (*_params(data), int(event_id)),
            )
            return cur.rowcount > 0

    def delete(self, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE event_id=%s", (int(event_id),))
            return cur.rowcount > 0
