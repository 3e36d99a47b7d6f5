from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.enums import Currency
from ..core.exceptions import NotFoundError
from ..expenses.repository import ExpenseRepository
from ..groups.model import Group
from ..groups.repository import GroupRepository
from ..participants.repository import ParticipantRepository
from ..payments.repository import PaymentRepository
from ..rates.cache import RateCache
from .balance import ParticipantStatement, participant_statement
from .calculator.base import FeeCalculator
from .calculator.standard_calculator import StandardFeeCalculator


@dataclass(frozen=True)
class GroupReportRow:
    group_id: int
    group_name: str
    participants: int
    currency: Currency
    expected: float
    paid: float
    expense: float
    net: float

    def to_dict(self) -> dict:
        return {
            "group_id": self.group_id,
            "group_name": self.group_name,
            "participants": self.participants,
            "currency": self.currency.value,
            "expected": self.expected,
            "paid": self.paid,
            "expense": self.expense,
            "net": self.net,
        }

    def export_row(self) -> dict:
        return {
            "Grup": self.group_name,
            "Katılımcı": self.participants,
            "Para Birimi": self.currency.value,
            "Beklenen Gelir": self.expected,
            "Tahsilat": self.paid,
            "Gider": self.expense,
            "Net": self.net,
        }


class GroupReportService:
    """Per-group totals in original currencies.

    Payments and expenses are never converted here; ``expected`` (sum of
    participant fees) is in the group's currency and only appears on that row.
    """

    def __init__(
        self,
        groups: GroupRepository,
        participants: ParticipantRepository,
        payments: PaymentRepository,
        expenses: ExpenseRepository,
        rate_cache: RateCache,
        *,
        calculator: Optional[FeeCalculator] = None,
    ):
        self._groups = groups
        self._participants = participants
        self._payments = payments
        self._expenses = expenses
        self._rate_cache = rate_cache
        self._calculator = calculator or StandardFeeCalculator()

    def _selected_groups(self, group_id: Optional[int]) -> List[Group]:
        if group_id is None:
            return list(self._groups.list_all())
        group = self._groups.get_by_id(group_id)
        if not group:
            raise NotFoundError("Grup bulunamadı")
        return [group]

    def build_group_report(self, group_id: Optional[int] = None) -> List[GroupReportRow]:
        rows: List[GroupReportRow] = []

        for g in self._selected_groups(group_id):
            members = self._participants.list(group_id=g.group_id)
            expected = sum(self._calculator.fee(g, p) for p in members)

            paid: Dict[Currency, float] = {}
            for pay in self._payments.list(group_id=g.group_id):
                paid[pay.currency] = paid.get(pay.currency, 0.0) + pay.amount

            spent: Dict[Currency, float] = {}
            for exp in self._expenses.list(group_id=g.group_id):
                spent[exp.currency] = spent.get(exp.currency, 0.0) + exp.amount

            for currency in Currency:
                p_sum = paid.get(currency, 0.0)
                e_sum = spent.get(currency, 0.0)
                is_group_currency = currency == g.currency
                if not (p_sum > 0 or e_sum > 0 or is_group_currency):
                    continue
                rows.append(
                    GroupReportRow(
                        group_id=g.group_id,
                        group_name=g.name,
                        participants=len(members),
                        currency=currency,
                        expected=expected if is_group_currency else 0.0,
                        paid=p_sum,
                        expense=e_sum,
                        net=p_sum - e_sum,
                    )
                )
        return rows

    def participant_statements(self, group_id: int) -> List[ParticipantStatement]:
        group = self._groups.get_by_id(group_id)
        if not group:
            raise NotFoundError("Grup bulunamadı")

        rates = self._rate_cache.current()
        payments = list(self._payments.list(group_id=group_id))
        return [
            participant_statement(
                group, payments, p, rates, calculator=self._calculator, defaults=self._rate_cache.defaults
            )
            for p in self._participants.list(group_id=group_id)
        ]

    def statement_for(self, participant_id: int) -> ParticipantStatement:
        participant = self._participants.get_by_id(participant_id)
        if not participant:
            raise NotFoundError("Katılımcı bulunamadı")
        group = self._groups.get_by_id(participant.group_id)
        if not group:
            raise NotFoundError("Grup bulunamadı")

        payments = self._payments.list(participant_id=participant_id)
        return participant_statement(
            group,
            payments,
            participant,
            self._rate_cache.current(),
            calculator=self._calculator,
            defaults=self._rate_cache.defaults,
        )
