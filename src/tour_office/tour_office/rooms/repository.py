from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Room


class RoomRepository(Protocol):
    def list_by_group(self, group_id: int) -> Sequence[Room]:
        raise NotImplementedError

    def get_by_id(self, room_id: int) -> Optional[Room]:
        raise NotImplementedError

    def create(self, room: Room) -> int:
        raise NotImplementedError

    def update(self, room: Room) -> bool:
        raise NotImplementedError

    def delete_by_id(self, room_id: int) -> bool:
        raise NotImplementedError
