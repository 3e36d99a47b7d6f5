"""Participant balances.

Two views exist and are labelled by ``RateBasis``:

* group currency, converting every payment at the rates in effect now (LIVE);
* TRY, using the ``amount_try`` stored with each payment (RECORDED).

They can disagree when rates moved between payment and read time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..core.enums import Currency, RateBasis
from ..groups.model import Group
from ..participants.model import Participant
from ..payments.model import Payment
from ..rates.model import ExchangeRates, RateDefaults
from .calculator.base import FeeCalculator
from .calculator.standard_calculator import StandardFeeCalculator
from .conversion import convert

_default_calculator = StandardFeeCalculator()


def _own(payments: Iterable[Payment], participant: Participant) -> List[Payment]:
    return [p for p in payments if p.participant_id == participant.participant_id]


def payment_sums_by_currency(payments: Iterable[Payment]) -> Dict[Currency, float]:
    sums: Dict[Currency, float] = {}
    for p in payments:
        sums[p.currency] = sums.get(p.currency, 0.0) + float(p.amount)
    return sums


def paid_in_currency(
    payments: Iterable[Payment],
    target: Currency,
    rates: ExchangeRates,
    defaults: RateDefaults = RateDefaults(),
) -> float:
    total = 0.0
    for currency, amount in payment_sums_by_currency(payments).items():
        total += convert(amount, currency, target, rates, defaults)
    return total


def recorded_try(payment: Payment) -> float:
    # Legacy rows were written without a snapshot.
    return float(payment.amount_try) if payment.amount_try else float(payment.amount)


def get_balance(
    group: Group,
    payments: Iterable[Payment],
    participant: Participant,
    rates: ExchangeRates,
    *,
    calculator: Optional[FeeCalculator] = None,
    defaults: RateDefaults = RateDefaults(),
) -> float:
    """Fee minus payments, in the group's currency at live rates.

    Positive means still owed, negative means overpaid. Not rounded.
    """

    calculator = calculator or _default_calculator
    fee = calculator.fee(group, participant)
    return fee - paid_in_currency(_own(payments, participant), group.currency, rates, defaults)


def get_balance_in_reference_currency(
    group: Group,
    payments: Iterable[Payment],
    participant: Participant,
    rates: ExchangeRates,
    *,
    calculator: Optional[FeeCalculator] = None,
    defaults: RateDefaults = RateDefaults(),
) -> float:
    calculator = calculator or _default_calculator
    fee_try = calculator.fee_in_reference_currency(group, participant, rates, defaults)
    return fee_try - sum(recorded_try(p) for p in _own(payments, participant))


@dataclass(frozen=True)
class ParticipantStatement:
    participant_id: int
    full_name: str
    currency: Currency
    fee: float
    paid: float
    balance: float
    fee_try: float
    paid_try: float
    balance_try: float
    paid_by_currency: Dict[Currency, float] = field(default_factory=dict)
    basis: RateBasis = RateBasis.LIVE
    try_basis: RateBasis = RateBasis.RECORDED

    def to_dict(self) -> dict:
        return {
            "participant_id": self.participant_id,
            "full_name": self.full_name,
            "currency": self.currency.value,
            "fee": self.fee,
            "paid": self.paid,
            "balance": self.balance,
            "basis": self.basis.value,
            "fee_try": self.fee_try,
            "paid_try": self.paid_try,
            "balance_try": self.balance_try,
            "try_basis": self.try_basis.value,
            "paid_by_currency": {c.value: v for c, v in self.paid_by_currency.items()},
        }


def participant_statement(
    group: Group,
    payments: Iterable[Payment],
    participant: Participant,
    rates: ExchangeRates,
    *,
    calculator: Optional[FeeCalculator] = None,
    defaults: RateDefaults = RateDefaults(),
) -> ParticipantStatement:
    calculator = calculator or _default_calculator
    own = _own(payments, participant)

    fee = calculator.fee(group, participant)
    paid = paid_in_currency(own, group.currency, rates, defaults)
    fee_try = calculator.fee_in_reference_currency(group, participant, rates, defaults)
    paid_try = sum(recorded_try(p) for p in own)

    return ParticipantStatement(
        participant_id=participant.participant_id,
        full_name=participant.full_name,
        currency=group.currency,
        fee=fee,
        paid=paid,
        balance=fee - paid,
        fee_try=fee_try,
        paid_try=paid_try,
        balance_try=fee_try - paid_try,
        paid_by_currency=payment_sums_by_currency(own),
    )
