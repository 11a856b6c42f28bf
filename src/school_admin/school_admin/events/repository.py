from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CalendarEvent, EventInput


class EventRepository(Protocol):
    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[CalendarEvent]:
        """Events ordered by date then start time; open bounds are unbounded."""

        raise NotImplementedError

    def get_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        raise NotImplementedError

    def create(self, data: EventInput) -> int:
        raise NotImplementedError

    def update(self, event_id: int, data: EventInput) -> bool:
        raise NotImplementedError

    def delete(self, event_id: int) -> bool:
        raise NotImplementedError
