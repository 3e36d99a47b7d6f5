from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Participant


class ParticipantRepository(Protocol):
    def list(self, *, group_id: Optional[int] = None, search: Optional[str] = None) -> Sequence[Participant]:
        raise NotImplementedError

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        raise NotImplementedError

    def count_by_group(self, group_id: int) -> int:
        raise NotImplementedError

    def create(self, participant: Participant) -> int:
        raise NotImplementedError

    def update(self, participant: Participant) -> bool:
        raise NotImplementedError

    def set_room(self, participant_id: int, *, room_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, participant_id: int) -> bool:
        raise NotImplementedError
