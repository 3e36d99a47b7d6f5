from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PASSPORT_RE = re.compile(r"^[A-Z]\d{8}$")


def require_non_empty(value: Any, field_name: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{field_name} zorunlu")
    return text


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} en az {min_len} karakter olmalı")
    return value


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Geçersiz {field_name}: {value!r}")


def require_choice(value: Any, choices: tuple, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Geçersiz {field_name}: {value!r}")
    if number not in choices:
        raise ValidationError(f"Geçersiz {field_name}: {value!r}")
    return number


def require_amount(value: Any, field_name: str = "Tutar", *, allow_zero: bool = False) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} sayı olmalı")
    if not math.isfinite(amount):
        raise ValidationError(f"{field_name} sayı olmalı")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"{field_name} sıfırdan büyük olmalı")
    return amount


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def normalize_phone(value: str) -> str:
    return _digits(value)


def normalize_passport(value: str) -> str:
    return re.sub(r"[^A-Z0-9]", "", (value or "").upper())


def is_tc(value: str) -> bool:
    return len(_digits(value)) == 11


def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


def is_phone_tr(value: str) -> bool:
    cleaned = _digits(value)
    return len(cleaned) == 10 and cleaned.startswith("5")


def is_passport(value: str) -> bool:
    return bool(_PASSPORT_RE.match(normalize_passport(value)))
