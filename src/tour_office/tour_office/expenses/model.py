from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..core.enums import Currency, ExpenseCategory


@dataclass(frozen=True)
class Expense:
    """Operational spend, optionally tied to a group."""

    expense_id: int
    group_id: Optional[int]
    spent_on: date
    amount: float
    currency: Currency
    amount_try: float
    category: ExpenseCategory = ExpenseCategory.OTHER
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expense_id": self.expense_id,
            "group_id": self.group_id,
            "spent_on": self.spent_on.isoformat(),
            "amount": self.amount,
            "currency": self.currency.value,
            "amount_try": self.amount_try,
            "category": self.category.value,
            "description": self.description,
        }
