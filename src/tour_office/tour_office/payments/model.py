from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..core.enums import Currency, PaymentMethod


@dataclass(frozen=True)
class Payment:
    """A participant payment. ``amount_try`` is the TRY value at write time."""

    payment_id: int
    participant_id: int
    paid_on: date
    amount: float
    currency: Currency
    amount_try: float
    method: PaymentMethod = PaymentMethod.CASH
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "payment_id": self.payment_id,
            "participant_id": self.participant_id,
            "paid_on": self.paid_on.isoformat(),
            "amount": self.amount,
            "currency": self.currency.value,
            "amount_try": self.amount_try,
            "method": self.method.value,
            "notes": self.notes,
        }
