from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CompanyEntry


class CompanyEntryRepository(Protocol):
    def list(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[CompanyEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[CompanyEntry]:
        raise NotImplementedError

    def create(self, entry: CompanyEntry) -> int:
        raise NotImplementedError

    def update(self, entry: CompanyEntry) -> bool:
        raise NotImplementedError

    def delete_by_id(self, entry_id: int) -> bool:
        raise NotImplementedError
