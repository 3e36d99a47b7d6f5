from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import require_amount, require_enum
from ..core.enums import EntryType, Period
from ..core.exceptions import NotFoundError, ValidationError
from ..expenses.repository import ExpenseRepository
from ..groups.repository import GroupRepository
from ..ledger.totals import currency_totals, totals_by_period
from ..participants.repository import ParticipantRepository
from ..payments.repository import PaymentRepository
from ..payments.service import require_entry_currency, snapshot_try
from ..rates.cache import RateCache
from .model import CompanyEntry, LedgerData, LedgerEntry
from .repository import CompanyEntryRepository

logger = logging.getLogger(__name__)

DERIVED_PREFIXES = ("PAY-", "EXP-")
SORT_KEYS = ("date", "type")


def parse_entry_key(key: Any) -> int:
    """Map a ledger key to a manual entry id; derived rows are rejected."""

    text = str(key or "").strip()
    if text.upper().startswith(DERIVED_PREFIXES):
        raise ValidationError("Grup işlemlerinden gelen kayıtlar burada düzenlenemez")
    try:
        return int(text)
    except ValueError:
        raise NotFoundError("Kayıt bulunamadı")


class CompanyEntryService:
    """Manual company income/expense records."""

    def __init__(self, entries: CompanyEntryRepository, rate_cache: RateCache):
        self._entries = entries
        self._rate_cache = rate_cache

    def list_entries(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[CompanyEntry]:
        return self._entries.list(start=start, end=end)

    def get_entry(self, key: Any) -> CompanyEntry:
        entry = self._entries.get_by_id(parse_entry_key(key))
        if not entry:
            raise NotFoundError("Kayıt bulunamadı")
        return entry

    def _build(self, data: Mapping[str, Any], *, entry_id: int = 0) -> CompanyEntry:
        amount = require_amount(data.get("amount"))
        currency = require_entry_currency(data.get("currency"))
        return CompanyEntry(
            entry_id=entry_id,
            entry_date=coerce_date(data.get("entry_date"), "Tarih"),
            entry_type=require_enum(data.get("entry_type"), EntryType, "kayıt türü"),
            amount=amount,
            currency=currency,
            amount_try=snapshot_try(amount, currency, self._rate_cache),
            category=(str(data.get("category") or "").strip() or "Diğer"),
            description=(data.get("description") or None),
        )

    def create_entry(self, data: Mapping[str, Any]) -> CompanyEntry:
        entry = self._build(data)
        entry_id = self._entries.create(entry)
        logger.info("Created company entry %s (%s %.2f %s)", entry_id, entry.entry_type.value, entry.amount, entry.currency.value)
        return self.get_entry(entry_id)

    def update_entry(self, key: Any, data: Mapping[str, Any]) -> CompanyEntry:
        existing = self.get_entry(key)
        entry = self._build({**existing.to_dict(), **dict(data)}, entry_id=existing.entry_id)
        self._entries.update(entry)
        return self.get_entry(existing.entry_id)

    def delete_entry(self, key: Any) -> None:
        existing = self.get_entry(key)
        if not self._entries.delete_by_id(existing.entry_id):
            raise NotFoundError("Kayıt bulunamadı")


class CompanyLedgerService:
    """Company ledger: manual entries plus read-only rows derived from
    participant payments (income) and expenses (expense)."""

    def __init__(
        self,
        entries: CompanyEntryRepository,
        payments: PaymentRepository,
        expenses: ExpenseRepository,
        participants: ParticipantRepository,
        groups: GroupRepository,
    ):
        self._entries = entries
        self._payments = payments
        self._expenses = expenses
        self._participants = participants
        self._groups = groups

    def _manual_rows(self, start: Optional[date], end: Optional[date]) -> List[LedgerEntry]:
        return [
            LedgerEntry(
                key=str(e.entry_id),
                entry_date=e.entry_date,
                entry_type=e.entry_type,
                currency=e.currency,
                amount=e.amount,
                amount_try=e.amount_try,
                category=e.category,
                description=e.description or "",
                readonly=False,
            )
            for e in self._entries.list(start=start, end=end)
        ]

    def _derived_rows(self, start: Optional[date], end: Optional[date], group_id: Optional[int]) -> List[LedgerEntry]:
        group_names = {g.group_id: g.name for g in self._groups.list_all()}
        participants = {p.participant_id: p for p in self._participants.list(group_id=group_id)}

        rows: List[LedgerEntry] = []
        for pay in self._payments.list(group_id=group_id, start=start, end=end):
            participant = participants.get(pay.participant_id)
            group_name = group_names.get(participant.group_id, "-") if participant else "-"
            rows.append(
                LedgerEntry(
                    key=f"PAY-{pay.payment_id}",
                    entry_date=pay.paid_on,
                    entry_type=EntryType.INCOME,
                    currency=pay.currency,
                    amount=pay.amount,
                    amount_try=pay.amount_try,
                    category=f"Ödeme - {group_name}",
                    description=participant.full_name if participant else "",
                    readonly=True,
                )
            )

        for exp in self._expenses.list(group_id=group_id, start=start, end=end):
            group_name = group_names.get(exp.group_id) if exp.group_id is not None else None
            category = f"Gider ({exp.category.value})"
            if group_name:
                category = f"{category} - {group_name}"
            rows.append(
                LedgerEntry(
                    key=f"EXP-{exp.expense_id}",
                    entry_date=exp.spent_on,
                    entry_type=EntryType.EXPENSE,
                    currency=exp.currency,
                    amount=exp.amount,
                    amount_try=exp.amount_try,
                    category=category,
                    description=exp.description or "",
                    readonly=True,
                )
            )
        return rows

    def build_ledger(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        group_id: Optional[int] = None,
        sort_by: str = "date",
        descending: bool = True,
    ) -> LedgerData:
        if sort_by not in SORT_KEYS:
            raise ValidationError(f"Geçersiz sıralama: {sort_by!r}")
        if start and end and end < start:
            raise ValidationError("Bitiş tarihi başlangıç tarihinden önce olamaz")

        # Manual entries are company-wide; a group filter keeps only that group's rows.
        rows = [] if group_id is not None else self._manual_rows(start, end)
        rows += self._derived_rows(start, end, group_id)

        if sort_by == "date":
            rows.sort(key=lambda e: e.entry_date, reverse=descending)
        else:
            # Income before expense when ascending.
            rows.sort(key=lambda e: 0 if e.entry_type == EntryType.INCOME else 1, reverse=descending)

        return LedgerData(
            entries=rows,
            totals=currency_totals(rows),
            monthly=totals_by_period(rows, Period.MONTHLY),
            weekly=totals_by_period(rows, Period.WEEKLY),
        )
