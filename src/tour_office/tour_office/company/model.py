from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from ..core.enums import Currency, EntryType


@dataclass(frozen=True)
class CompanyEntry:
    """Manual company-level income or expense."""

    entry_id: int
    entry_date: date
    entry_type: EntryType
    amount: float
    currency: Currency
    amount_try: float
    category: str = "Diğer"
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "entry_date": self.entry_date.isoformat(),
            "entry_type": self.entry_type.value,
            "amount": self.amount,
            "currency": self.currency.value,
            "amount_try": self.amount_try,
            "category": self.category,
            "description": self.description,
        }


@dataclass(frozen=True)
class LedgerEntry:
    """Read model row of the company ledger.

    Manual entries keep their numeric key; rows derived from payments and
    expenses use ``PAY-<id>`` / ``EXP-<id>`` and are read-only.
    """

    key: str
    entry_date: date
    entry_type: EntryType
    currency: Currency
    amount: float
    amount_try: float
    category: str
    description: str = ""
    readonly: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "entry_date": self.entry_date.isoformat(),
            "entry_type": self.entry_type.value,
            "currency": self.currency.value,
            "amount": self.amount,
            "amount_try": self.amount_try,
            "category": self.category,
            "description": self.description,
            "readonly": self.readonly,
        }

    def export_row(self) -> Dict[str, Any]:
        return {
            "Tarih": self.entry_date.isoformat(),
            "Tür": self.entry_type.value,
            "Kategori": self.category,
            "Açıklama": self.description,
            "Tutar (Orijinal)": f"{self.amount:.2f} {self.currency.value}",
            "Tutar (TL)": self.amount_try,
            "Kaynak": "Grup İşlemleri" if self.readonly else "Manuel",
        }


@dataclass(frozen=True)
class LedgerData:
    entries: List[LedgerEntry] = field(default_factory=list)
    totals: Mapping = field(default_factory=dict)
    monthly: Mapping = field(default_factory=dict)
    weekly: Mapping = field(default_factory=dict)
