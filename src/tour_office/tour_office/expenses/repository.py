from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Expense


class ExpenseRepository(Protocol):
    def list(
        self,
        *,
        group_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Expense]:
        raise NotImplementedError

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        raise NotImplementedError

    def create(self, expense: Expense) -> int:
        raise NotImplementedError

    def update(self, expense: Expense) -> bool:
        raise NotImplementedError

    def delete_by_id(self, expense_id: int) -> bool:
        raise NotImplementedError
