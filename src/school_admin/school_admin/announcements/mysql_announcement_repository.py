from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AnnouncementPriority
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Announcement, AnnouncementInput
from .repository import AnnouncementRepository

_SELECT = """
    SELECT announcement_id, title, content, date, is_active, priority
    FROM announcements
"""


def _row_to_announcement(r: dict) -> Announcement:
    return Announcement(
        announcement_id=int(r["announcement_id"]),
        title=r["title"],
        content=r["content"],
        date=r["date"],
        is_active=bool(r["is_active"]),
        priority=AnnouncementPriority(r.get("priority") or AnnouncementPriority.NORMAL.value),
    )


def _params(data: AnnouncementInput) -> tuple:
    return (data.title, data.content, data.date, int(data.is_active), data.priority.value)


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, include_inactive: bool = False) -> Sequence[Announcement]:
        where = "" if include_inactive else "WHERE is_active=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY date DESC, announcement_id DESC")
            return [_row_to_announcement(r) for r in fetchall(cur)]

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE announcement_id=%s", (int(announcement_id),))
            r = fetchone(cur)
            return _row_to_announcement(r) if r else None

    def create(self, data: AnnouncementInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO announcements(title, content, date, is_active, priority)
                VALUES(%s,%s,%s,%s,%s)
                """,
                _params(data),
            )
            return int(cur.lastrowid)

    def update(self, announcement_id: int, data: AnnouncementInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE announcements
                SET title=%s, content=%s, date=%s, is_active=%s, priority=%s
                WHERE announcement_id=%s
                """,
                (*_params(data), int(announcement_id)),
            )
            return cur.rowcount > 0

    def delete(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE announcement_id=%s", (int(announcement_id),))
            return cur.rowcount > 0
