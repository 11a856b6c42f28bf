from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AnnouncementPriority


@dataclass(frozen=True)
class Announcement:
    """Domain entity: a notice shown on the dashboard (aviso)."""

    announcement_id: int
    title: str
    content: str
    date: date
    is_active: bool = True
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL

    def to_dict(self) -> dict:
        return {
            "id": self.announcement_id,
            "title": self.title,
            "content": self.content,
            "date": self.date.isoformat(),
            "is_active": self.is_active,
            "priority": self.priority.value,
        }


@dataclass(frozen=True)
class AnnouncementInput:
    title: str
    content: str
    date: date
    is_active: bool
    priority: AnnouncementPriority
