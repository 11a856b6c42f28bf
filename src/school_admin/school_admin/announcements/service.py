from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_date_param
from ..common.validators import parse_bool, require_enum, require_non_empty
from ..core.enums import AnnouncementPriority
from ..core.exceptions import NotFoundError, ValidationError
from .model import Announcement, AnnouncementInput
from .repository import AnnouncementRepository


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    def list(self, *, include_inactive: bool = False, search: Optional[str] = None) -> Sequence[Announcement]:
        items = self._announcements.list_all(include_inactive=include_inactive)
        query = (search or "").strip().lower()
        if not query:
            return items
        return [a for a in items if query in f"{a.title} {a.content}".lower()]

    def get(self, announcement_id: int) -> Announcement:
        item = self._announcements.get_by_id(int(announcement_id))
        if not item:
            raise NotFoundError("Aviso não encontrado")
        return item

    def create(self, payload: Mapping[str, Any], *, today: Optional[date] = None) -> Announcement:
        data = self._validate(payload, today=today or date.today())
        return self.get(self._announcements.create(data))

    def update(self, announcement_id: int, payload: Mapping[str, Any]) -> Announcement:
        current = self.get(announcement_id)
        merged = {**current.to_dict(), **dict(payload)}
        self._announcements.update(current.announcement_id, self._validate(merged, today=current.date))
        return self.get(current.announcement_id)

    def delete(self, announcement_id: int) -> None:
        self.get(announcement_id)
        if not self._announcements.delete(int(announcement_id)):
            raise ValidationError("Falha ao excluir aviso")

    def _validate(self, payload: Mapping[str, Any], *, today: date) -> AnnouncementInput:
        return AnnouncementInput(
            title=require_non_empty(payload.get("title"), "Título"),
            content=require_non_empty(payload.get("content"), "Conteúdo"),
            date=parse_date_param(payload.get("date"), "Data") or today,
            is_active=parse_bool(payload.get("is_active"), default=True),
            priority=require_enum(payload.get("priority") or AnnouncementPriority.NORMAL, "Prioridade", AnnouncementPriority),
        )
