from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Protocol

from ..core.enums import Currency, EntryType, Period


class _Flow(Protocol):
    entry_date: date
    entry_type: EntryType
    currency: Currency
    amount: float


@dataclass(frozen=True)
class CurrencyTotals:
    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        return self.income - self.expense

    def add(self, entry_type: EntryType, amount: float) -> "CurrencyTotals":
        if entry_type == EntryType.INCOME:
            return CurrencyTotals(self.income + amount, self.expense)
        return CurrencyTotals(self.income, self.expense + amount)

    def to_dict(self) -> dict:
        return {"income": self.income, "expense": self.expense, "balance": self.balance}


def currency_totals(entries: Iterable[_Flow]) -> Dict[Currency, CurrencyTotals]:
    """Income/expense per ORIGINAL currency; currencies never merge.

    A currency with neither income nor expense is left out.
    """

    acc: Dict[Currency, CurrencyTotals] = {}
    for e in entries:
        acc[e.currency] = acc.get(e.currency, CurrencyTotals()).add(e.entry_type, float(e.amount))

    return {
        c: acc[c]
        for c in Currency
        if c in acc and (acc[c].income != 0 or acc[c].expense != 0)
    }


def bucket_key(day: date, period: Period) -> str:
    """``YYYY-MM`` for monthly, ISO-8601 ``YYYY-Www`` for weekly buckets."""

    if period == Period.MONTHLY:
        return f"{day.year:04d}-{day.month:02d}"
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def totals_by_period(entries: Iterable[_Flow], period: Period) -> Dict[str, Dict[Currency, CurrencyTotals]]:
    buckets: Dict[str, list] = {}
    for e in entries:
        buckets.setdefault(bucket_key(e.entry_date, period), []).append(e)
    return {key: currency_totals(buckets[key]) for key in sorted(buckets)}


def totals_to_dict(totals: Dict[Currency, CurrencyTotals]) -> dict:
    return {c.value: t.to_dict() for c, t in totals.items()}
