from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value or "").strip()[:10])
    except ValueError:
        raise ValidationError(f"{field_name} geçersiz (YYYY-AA-GG)")


def coerce_optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return coerce_date(value, field_name)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()
