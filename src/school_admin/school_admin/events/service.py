from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds, parse_date_param, parse_hhmm
from ..common.validators import optional_text, require_enum, require_non_empty
from ..core.constants import DEFAULT_UPCOMING_EVENTS_LIMIT, EVENT_COLORS
from ..core.enums import EventType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logger import get_logger
from .model import CalendarDay, CalendarEvent, EventInput
from .repository import EventRepository

logger = get_logger(__name__)


class EventService:
    """Use case: school calendar (CRUD, month grid, upcoming events)."""

    def __init__(self, events: EventRepository):
        self._events = events

    def list(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[CalendarEvent]:
        if start and end and start > end:
            raise ValidationError("Data inicial deve ser anterior à data final")
        return self._events.list_range(start=start, end=end)

    def get(self, event_id: int) -> CalendarEvent:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError("Evento não encontrado")
        return event

    def create(self, payload: Mapping[str, Any]) -> CalendarEvent:
        data = self._validate(payload)
        event_id = self._events.create(data)
        logger.info("Event %s created (%s on %s)", event_id, data.title, data.date.isoformat())
        return self.get(event_id)

    def update(self, event_id: int, payload: Mapping[str, Any]) -> CalendarEvent:
        current = self.get(event_id)
        merged = {**current.to_dict(), **dict(payload)}
        if "event_type" in payload and "color" not in payload:
            # Color follows the new type unless the caller picked one.
            merged["color"] = None
        self._events.update(current.event_id, self._validate(merged))
        return self.get(current.event_id)

    def delete(self, event_id: int) -> None:
        self.get(event_id)
        if not self._events.delete(int(event_id)):
            raise ValidationError("Falha ao excluir evento")

    def month_grid(self, *, year: int, month: int) -> dict:
        """Days of the month with their events, plus the Sunday-first padding."""
        if not 1 <= int(month) <= 12:
            raise ValidationError("Mês inválido")
        first, last = month_bounds(date(int(year), int(month), 1))

        by_day: dict[date, list[CalendarEvent]] = defaultdict(list)
        for event in self._events.list_range(start=first, end=last):
            by_day[event.date].append(event)

        days = []
        current = first
        while current <= last:
            days.append(CalendarDay(date=current, events=by_day.get(current, [])))
            current += timedelta(days=1)

        return {
            "year": first.year,
            "month": first.month,
            "padding": (first.weekday() + 1) % 7,
            "days": days,
        }

    def upcoming(self, *, today: date, limit: int = DEFAULT_UPCOMING_EVENTS_LIMIT) -> list[CalendarEvent]:
        return list(self._events.list_range(start=today))[: max(int(limit), 0)]

    def _validate(self, payload: Mapping[str, Any]) -> EventInput:
        title = require_non_empty(payload.get("title"), "Título")
        on = parse_date_param(payload.get("date"), "Data")
        if on is None:
            raise ValidationError("Data é obrigatória")
        event_type = require_enum(payload.get("event_type"), "Tipo de evento", EventType)

        start_time = parse_hhmm(payload.get("start_time"), "Horário de início")
        end_time = parse_hhmm(payload.get("end_time"), "Horário de término")
        if start_time and end_time and start_time > end_time:
            raise ValidationError("Horário de início deve ser anterior ao término")

        return EventInput(
            title=title,
            event_type=event_type,
            date=on,
            description=optional_text(payload.get("description")),
            start_time=start_time,
            end_time=end_time,
            color=optional_text(payload.get("color")) or EVENT_COLORS[event_type.value],
        )
