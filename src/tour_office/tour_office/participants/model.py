from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..core.enums import Gender


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Participant:
    participant_id: int
    group_id: int
    full_name: str
    room_type: int
    day_count: int
    gender: Gender = Gender.MR
    discount: float = 0.0
    phone: Optional[str] = None
    email: Optional[str] = None
    id_number: Optional[str] = None
    passport_no: Optional[str] = None
    passport_valid_until: Optional[date] = None
    birth_date: Optional[date] = None
    room_id: Optional[int] = None
    reference: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "group_id": self.group_id,
            "full_name": self.full_name,
            "phone": self.phone,
            "email": self.email,
            "id_number": self.id_number,
            "passport_no": self.passport_no,
            "passport_valid_until": _iso(self.passport_valid_until),
            "birth_date": _iso(self.birth_date),
            "gender": self.gender.value,
            "room_type": self.room_type,
            "day_count": self.day_count,
            "discount": self.discount,
            "room_id": self.room_id,
            "reference": self.reference,
        }
