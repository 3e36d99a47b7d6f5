from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import require_amount, require_enum
from ..core.constants import ENTRY_CURRENCIES
from ..core.enums import Currency, PaymentMethod
from ..core.exceptions import NotFoundError, ValidationError
from ..ledger.conversion import to_reference
from ..participants.repository import ParticipantRepository
from ..rates.cache import RateCache
from .model import Payment
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


def require_entry_currency(value: Any) -> Currency:
    currency = require_enum(value or Currency.TRY, Currency, "para birimi")
    if currency not in ENTRY_CURRENCIES:
        raise ValidationError(f"Geçersiz para birimi: {currency.value}")
    return currency


def snapshot_try(amount: float, currency: Currency, rate_cache: RateCache) -> float:
    """TRY value at write time; stored and never recomputed."""

    rates = rate_cache.current()
    return round(to_reference(amount, currency, rates, rate_cache.defaults), 2)


class PaymentService:
    def __init__(self, payments: PaymentRepository, participants: ParticipantRepository, rate_cache: RateCache):
        self._payments = payments
        self._participants = participants
        self._rate_cache = rate_cache

    def list_payments(
        self,
        *,
        participant_id: Optional[int] = None,
        group_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Payment]:
        return self._payments.list(participant_id=participant_id, group_id=group_id, start=start, end=end)

    def get_payment(self, payment_id: int) -> Payment:
        payment = self._payments.get_by_id(payment_id)
        if not payment:
            raise NotFoundError("Ödeme bulunamadı")
        return payment

    def _build(self, data: Mapping[str, Any], *, payment_id: int = 0) -> Payment:
        try:
            participant_id = int(data.get("participant_id"))
        except (TypeError, ValueError):
            raise ValidationError("Katılımcı seçin")
        if not self._participants.get_by_id(participant_id):
            raise ValidationError("Katılımcı bulunamadı")

        amount = require_amount(data.get("amount"))
        currency = require_entry_currency(data.get("currency"))
        return Payment(
            payment_id=payment_id,
            participant_id=participant_id,
            paid_on=coerce_date(data.get("paid_on"), "Ödeme tarihi"),
            amount=amount,
            currency=currency,
            amount_try=snapshot_try(amount, currency, self._rate_cache),
            method=require_enum(data.get("method") or PaymentMethod.CASH, PaymentMethod, "ödeme yöntemi"),
            notes=(data.get("notes") or None),
        )

    def create_payment(self, data: Mapping[str, Any]) -> Payment:
        payment = self._build(data)
        payment_id = self._payments.create(payment)
        logger.info(
            "Recorded payment %s: %.2f %s for participant %s",
            payment_id, payment.amount, payment.currency.value, payment.participant_id,
        )
        return self.get_payment(payment_id)

    def update_payment(self, payment_id: int, data: Mapping[str, Any]) -> Payment:
        existing = self.get_payment(payment_id)
        payment = self._build({**existing.to_dict(), **dict(data)}, payment_id=payment_id)
        self._payments.update(payment)
        return self.get_payment(payment_id)

    def delete_payment(self, payment_id: int) -> None:
        self.get_payment(payment_id)
        if not self._payments.delete_by_id(payment_id):
            raise NotFoundError("Ödeme bulunamadı")
