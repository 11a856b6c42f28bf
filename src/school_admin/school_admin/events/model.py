from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import EventType


@dataclass(frozen=True)
class CalendarEvent:
    """Domain entity: an entry of the school calendar."""

    event_id: int
    title: str
    event_type: EventType
    date: date
    description: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    color: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "description": self.description,
            "event_type": self.event_type.value,
            "date": self.date.isoformat(),
            "start_time": format_hhmm(self.start_time),
            "end_time": format_hhmm(self.end_time),
            "color": self.color,
        }


@dataclass(frozen=True)
class EventInput:
    title: str
    event_type: EventType
    date: date
    description: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid."""

    date: date
    events: list[CalendarEvent]

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "events": [e.to_dict() for e in self.events]}
