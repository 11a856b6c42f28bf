from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassInput, ClassItem


class ClassRepository(Protocol):
    def list_all(self) -> Sequence[ClassItem]:
        raise NotImplementedError

    def get_by_id(self, class_id: int) -> Optional[ClassItem]:
        raise NotImplementedError

    def create(self, data: ClassInput) -> int:
        raise NotImplementedError

    def update(self, class_id: int, data: ClassInput) -> bool:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        raise NotImplementedError
