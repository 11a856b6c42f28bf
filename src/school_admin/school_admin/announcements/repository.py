from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Announcement, AnnouncementInput


class AnnouncementRepository(Protocol):
    def list_all(self, *, include_inactive: bool = False) -> Sequence[Announcement]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

    def create(self, data: AnnouncementInput) -> int:
        raise NotImplementedError

    def update(self, announcement_id: int, data: AnnouncementInput) -> bool:
        raise NotImplementedError

    def delete(self, announcement_id: int) -> bool:
        raise NotImplementedError
