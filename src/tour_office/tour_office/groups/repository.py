from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import GroupStatus
from .model import Group


class GroupRepository(Protocol):
    def list_all(self, *, status: Optional[GroupStatus] = None) -> Sequence[Group]:
        raise NotImplementedError

    def get_by_id(self, group_id: int) -> Optional[Group]:
        raise NotImplementedError

    def create(self, group: Group) -> int:
        raise NotImplementedError

    def update(self, group: Group) -> bool:
        raise NotImplementedError

    def set_status(self, group_id: int, *, status: GroupStatus, archived_at: Optional[datetime] = None) -> bool:
        raise NotImplementedError

    def delete_cascade(self, group_id: int) -> bool:
        """Delete the group with its rooms, participants, their payments and its expenses."""
        raise NotImplementedError
