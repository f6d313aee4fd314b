"""Input validation helpers shared by the domain services."""

from enum import Enum
from typing import Optional, Sequence, TypeVar

from cajachica.domain.entities import Page
from cajachica.domain.errors import ValidationError

E = TypeVar("E", bound=Enum)


def require_text(value: Optional[str], label: str, max_length: Optional[int] = None) -> str:
    """Return the stripped value or raise if it is empty or too long."""
    if value is None or not value.strip():
        raise ValidationError(f"{label} es requerido")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{label} no puede exceder {max_length} caracteres")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip a free-text value, mapping blank strings to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def coerce_enum(enum_cls: type[E], value, label: str) -> E:
    """Convert a raw value to a member of enum_cls or raise ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{label} inválido: '{value}' (valores permitidos: {allowed})")


def paginate(items: Sequence, page: int = 1, limit: int = 10) -> Page:
    """Slice items into a Page (1-based page numbers)."""
    page = max(page, 1)
    limit = max(limit, 1)
    start = (page - 1) * limit
    return Page(items=tuple(items[start:start + limit]), page=page, limit=limit, total=len(items))
