from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_choice, require_non_empty
from ..core.constants import ROOM_SIZES
from ..core.exceptions import NotFoundError, ValidationError
from ..groups.repository import GroupRepository
from ..participants.repository import ParticipantRepository
from .model import Room, RoomingList, RoomOccupancy
from .repository import RoomRepository


class RoomService:
    """Rooms are labels; occupancy is not enforced against the room size."""

    def __init__(self, rooms: RoomRepository, groups: GroupRepository, participants: ParticipantRepository):
        self._rooms = rooms
        self._groups = groups
        self._participants = participants

    def _require_group(self, group_id: Any) -> int:
        try:
            gid = int(group_id)
        except (TypeError, ValueError):
            raise ValidationError("Grup seçin")
        if not self._groups.get_by_id(gid):
            raise ValidationError("Grup bulunamadı")
        return gid

    def list_rooms(self, group_id: int) -> Sequence[Room]:
        return self._rooms.list_by_group(group_id)

    def get_room(self, room_id: int) -> Room:
        room = self._rooms.get_by_id(room_id)
        if not room:
            raise NotFoundError("Oda bulunamadı")
        return room

    def create_room(self, data: Mapping[str, Any]) -> Room:
        room = Room(
            room_id=0,
            group_id=self._require_group(data.get("group_id")),
            name=require_non_empty(data.get("name"), "Oda adı"),
            room_type=require_choice(data.get("room_type"), ROOM_SIZES, "oda tipi"),
        )
        return self.get_room(self._rooms.create(room))

    def update_room(self, room_id: int, data: Mapping[str, Any]) -> Room:
        existing = self.get_room(room_id)
        room = Room(
            room_id=room_id,
            group_id=existing.group_id,
            name=require_non_empty(data.get("name", existing.name), "Oda adı"),
            room_type=require_choice(data.get("room_type", existing.room_type), ROOM_SIZES, "oda tipi"),
        )
        self._rooms.update(room)
        return self.get_room(room_id)

    def delete_room(self, room_id: int) -> None:
        self.get_room(room_id)
        if not self._rooms.delete_by_id(room_id):
            raise NotFoundError("Oda bulunamadı")

    def assign(self, participant_id: int, room_id: Optional[int]) -> None:
        participant = self._participants.get_by_id(participant_id)
        if not participant:
            raise NotFoundError("Katılımcı bulunamadı")
        if room_id is not None:
            room = self.get_room(room_id)
            if room.group_id != participant.group_id:
                raise ValidationError("Oda bu gruba ait değil")
        self._participants.set_room(participant_id, room_id=room_id)

    def rooming_list(self, group_id: int) -> RoomingList:
        if not self._groups.get_by_id(group_id):
            raise NotFoundError("Grup bulunamadı")

        rooms = self._rooms.list_by_group(group_id)
        participants = self._participants.list(group_id=group_id)
        room_ids = {r.room_id for r in rooms}

        return RoomingList(
            group_id=group_id,
            rooms=[
                RoomOccupancy(room=r, occupants=[p for p in participants if p.room_id == r.room_id])
                for r in rooms
            ],
            unassigned=[p for p in participants if p.room_id not in room_ids],
        )
