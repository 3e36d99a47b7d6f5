from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Kullanıcı rolü (yetkilendirme için)."""

    ADMIN = "admin"
    STAFF = "staff"


class Currency(str, Enum):
    TRY = "TRY"
    USD = "USD"
    SAR = "SAR"


class GroupType(str, Enum):
    HAC = "Hac"
    UMRE = "Umre"
    GEZI = "Gezi"


class GroupStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    CANCELLED = "cancelled"


class Gender(str, Enum):
    MR = "Mr"
    MRS = "Mrs"
    CHD = "Chd"


class PaymentMethod(str, Enum):
    CASH = "Nakit"
    CARD = "Kart"
    TRANSFER = "Havale"
    OTHER = "Diğer"


class ExpenseCategory(str, Enum):
    FLIGHT = "Uçak"
    HOTEL = "Otel"
    TRANSFER = "Transfer"
    GUIDE = "Rehberlik"
    VISA = "Vize"
    OTHER = "Diğer"


class EntryType(str, Enum):
    """Şirket muhasebe kaydı türü."""

    INCOME = "Gelir"
    EXPENSE = "Gider"


class RateBasis(str, Enum):
    """Which rates produced a converted value.

    LIVE: rates in effect when the value is read.
    RECORDED: the amount_try snapshot stored when the record was written.
    """

    LIVE = "live"
    RECORDED = "recorded"


class Period(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"
