from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from ..core.constants import DAY_COUNTS
from ..core.enums import Currency, GroupStatus, GroupType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class FeeSet:
    """Per-person fee for each billable room type."""

    room2: float = 0.0
    room3: float = 0.0
    room4: float = 0.0

    def for_room(self, room_type: int) -> float:
        return float(getattr(self, f"room{room_type}", 0.0) or 0.0)

    def to_dict(self) -> Dict[str, float]:
        return {"room2": self.room2, "room3": self.room3, "room4": self.room4}


def _fee_value(value: Any, label: str) -> float:
    if value in (None, ""):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Geçersiz ücret ({label}): {value!r}")
    if not math.isfinite(amount):
        raise ValidationError(f"Geçersiz ücret ({label}): {value!r}")
    return amount


@dataclass(frozen=True)
class FeeSchedule:
    """Fee table: trip length in days → FeeSet. Missing entries mean 0."""

    by_days: Mapping[int, FeeSet] = field(default_factory=dict)

    def fee(self, day_count: int, room_type: int) -> float:
        fee_set = self.by_days.get(int(day_count))
        if fee_set is None:
            return 0.0
        return fee_set.for_room(int(room_type))

    def values(self):
        for fee_set in self.by_days.values():
            yield from (fee_set.room2, fee_set.room3, fee_set.room4)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FeeSchedule":
        """Accept ``{"d7": {"room2": 1000, ...}}`` (stored form) or plain day keys."""

        data = data or {}
        if not isinstance(data, Mapping):
            raise ValidationError("Geçersiz ücret tablosu")

        by_days: Dict[int, FeeSet] = {}
        for key, rooms in data.items():
            try:
                days = int(str(key).lstrip("dD"))
            except ValueError:
                raise ValidationError(f"Geçersiz gün sayısı: {key!r}")
            if days not in DAY_COUNTS:
                raise ValidationError(f"Geçersiz gün sayısı: {key!r}")
            rooms = rooms or {}
            if not isinstance(rooms, Mapping):
                raise ValidationError("Geçersiz ücret tablosu")
            by_days[days] = FeeSet(
                room2=_fee_value(rooms.get("room2"), f"d{days}/room2"),
                room3=_fee_value(rooms.get("room3"), f"d{days}/room3"),
                room4=_fee_value(rooms.get("room4"), f"d{days}/room4"),
            )
        return cls(by_days=by_days)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {f"d{days}": self.by_days[days].to_dict() for days in sorted(self.by_days)}


@dataclass(frozen=True)
class Group:
    group_id: int
    name: str
    group_type: GroupType
    start_date: date
    end_date: Optional[date]
    capacity: int
    currency: Currency
    fees: FeeSchedule = field(default_factory=FeeSchedule)
    notes: Optional[str] = None
    status: GroupStatus = GroupStatus.PLANNING
    archived_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_id": self.group_id,
            "name": self.name,
            "group_type": self.group_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "capacity": self.capacity,
            "currency": self.currency.value,
            "fees_by_duration": self.fees.to_dict(),
            "notes": self.notes,
            "status": self.status.value,
            "archived_at": self.archived_at.isoformat() if self.archived_at else None,
        }
