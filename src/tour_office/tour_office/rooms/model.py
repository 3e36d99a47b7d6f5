from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..participants.model import Participant


@dataclass(frozen=True)
class Room:
    """A labelled room inside a group. Size is informational only."""

    room_id: int
    group_id: int
    name: str
    room_type: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "room_id": self.room_id,
            "group_id": self.group_id,
            "name": self.name,
            "room_type": self.room_type,
        }


@dataclass(frozen=True)
class RoomOccupancy:
    room: Room
    occupants: List[Participant] = field(default_factory=list)


@dataclass(frozen=True)
class RoomingList:
    group_id: int
    rooms: List[RoomOccupancy] = field(default_factory=list)
    unassigned: List[Participant] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_id": self.group_id,
            "rooms": [
                {**occ.room.to_dict(), "occupants": [p.to_dict() for p in occ.occupants]}
                for occ in self.rooms
            ],
            "unassigned": [p.to_dict() for p in self.unassigned],
        }

    def export_rows(self) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        for occ in self.rooms:
            for p in occ.occupants:
                rows.append(
                    {
                        "Oda": occ.room.name,
                        "Oda Tipi": occ.room.room_type,
                        "Ad Soyad": p.full_name,
                        "Cinsiyet": p.gender.value,
                        "Pasaport": p.passport_no or "",
                    }
                )
        for p in self.unassigned:
            rows.append(
                {
                    "Oda": "Atanmamış",
                    "Oda Tipi": p.room_type,
                    "Ad Soyad": p.full_name,
                    "Cinsiyet": p.gender.value,
                    "Pasaport": p.passport_no or "",
                }
            )
        return rows
