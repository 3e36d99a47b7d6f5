from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import require_amount, require_enum
from ..core.enums import ExpenseCategory
from ..core.exceptions import NotFoundError, ValidationError
from ..groups.repository import GroupRepository
from ..payments.service import require_entry_currency, snapshot_try
from ..rates.cache import RateCache
from .model import Expense
from .repository import ExpenseRepository


class ExpenseService:
    def __init__(self, expenses: ExpenseRepository, groups: GroupRepository, rate_cache: RateCache):
        self._expenses = expenses
        self._groups = groups
        self._rate_cache = rate_cache

    def list_expenses(
        self,
        *,
        group_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Expense]:
        return self._expenses.list(group_id=group_id, start=start, end=end)

    def get_expense(self, expense_id: int) -> Expense:
        expense = self._expenses.get_by_id(expense_id)
        if not expense:
            raise NotFoundError("Gider bulunamadı")
        return expense

    def _build(self, data: Mapping[str, Any], *, expense_id: int = 0) -> Expense:
        group_id = data.get("group_id")
        if group_id in (None, ""):
            group_id = None
        else:
            try:
                group_id = int(group_id)
            except (TypeError, ValueError):
                raise ValidationError(f"Geçersiz grup: {group_id!r}")
            if not self._groups.get_by_id(group_id):
                raise ValidationError("Grup bulunamadı")

        amount = require_amount(data.get("amount"))
        currency = require_entry_currency(data.get("currency"))
        return Expense(
            expense_id=expense_id,
            group_id=group_id,
            spent_on=coerce_date(data.get("spent_on"), "Gider tarihi"),
            amount=amount,
            currency=currency,
            amount_try=snapshot_try(amount, currency, self._rate_cache),
            category=require_enum(data.get("category") or ExpenseCategory.OTHER, ExpenseCategory, "kategori"),
            description=(data.get("description") or None),
        )

    def create_expense(self, data: Mapping[str, Any]) -> Expense:
        return self.get_expense(self._expenses.create(self._build(data)))

    def update_expense(self, expense_id: int, data: Mapping[str, Any]) -> Expense:
        existing = self.get_expense(expense_id)
        expense = self._build({**existing.to_dict(), **dict(data)}, expense_id=expense_id)
        self._expenses.update(expense)
        return self.get_expense(expense_id)

    def delete_expense(self, expense_id: int) -> None:
        self.get_expense(expense_id)
        if not self._expenses.delete_by_id(expense_id):
            raise NotFoundError("Gider bulunamadı")
