"""Roster filter used by the chamada screen."""

from __future__ import annotations

import unicodedata
from typing import Iterable, Optional

from ..core.constants import ALL_CLASSES
from .model import Student


def name_sort_key(full_name: str) -> tuple[str, str]:
    """Accent- and case-insensitive ordering key ('Álvaro' sorts with 'alvaro')."""
    folded = unicodedata.normalize("NFKD", full_name)
    folded = "".join(c for c in folded if not unicodedata.combining(c)).casefold()
    return folded, full_name


def filter_roster(students: Iterable[Student], shift: str, class_id: Optional[int | str] = None) -> list[Student]:
    """Active students of ``shift`` (and ``class_id`` when given), sorted by name."""
    wanted_class = None if class_id in (None, "", ALL_CLASSES) else int(class_id)
    selected = [
        s
        for s in students
        if s.is_active and s.shift == shift and (wanted_class is None or s.class_id == wanted_class)
    ]
    return sorted(selected, key=lambda s: name_sort_key(s.full_name))
