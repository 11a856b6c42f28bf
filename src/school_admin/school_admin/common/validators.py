from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_choice(value: Optional[str], field_name: str, choices: Iterable[str]) -> str:
    value = require_non_empty(value, field_name)
    allowed = tuple(choices)
    if value not in allowed:
        raise ValidationError(f"{field_name} inválido: {value!r} (opções: {', '.join(allowed)})")
    return value


def require_enum(value, field_name: str, enum_cls: type[E]) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(require_non_empty(value, field_name))
    except ValueError:
        options = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"{field_name} inválido: {value!r} (opções: {options})") from None


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} deve ser um número inteiro") from None
    if number <= 0:
        raise ValidationError(f"{field_name} deve ser maior que zero")
    return number


def parse_bool(value, default: bool = True) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "sim", "on"}
