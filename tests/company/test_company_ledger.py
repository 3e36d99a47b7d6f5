from datetime import date

import pytest

from src.tour_office.tour_office.company.service import parse_entry_key
from src.tour_office.tour_office.core.enums import Currency, EntryType, ExpenseCategory
from src.tour_office.tour_office.core.exceptions import NotFoundError, ValidationError
from src.tour_office.tour_office.expenses.model import Expense
from src.tour_office.tour_office.ledger.totals import CurrencyTotals


@pytest.fixture
def ledger_data(container, repos, add_group, add_participant, add_payment):
    group = add_group(name="Umre Şubat")
    other = add_group(name="Hac 2026")
    ali = add_participant(group)
    veli = add_participant(other, full_name="Veli")
    add_payment(ali, 500, Currency.USD, paid_on=date(2026, 1, 10))
    add_payment(veli, 2000, Currency.TRY, paid_on=date(2026, 2, 3))
    repos.expenses.create(
        Expense(0, group.group_id, date(2026, 1, 12), 100, Currency.USD, 3000, ExpenseCategory.HOTEL, "Otel kaparo")
    )
    container.company_entry_service.create_entry(
        {"entry_date": "2026-01-15", "entry_type": "Gider", "amount": 750, "currency": "TRY", "category": "Kira"}
    )
    return group, other


def test_ledger_merges_manual_and_derived_rows(container, ledger_data):
    data = container.company_ledger_service.build_ledger()

    keys = [e.key for e in data.entries]
    assert len(keys) == 4
    assert sum(k.startswith("PAY-") for k in keys) == 2
    assert sum(k.startswith("EXP-") for k in keys) == 1
    assert [e.entry_date for e in data.entries] == sorted((e.entry_date for e in data.entries), reverse=True)

    payment_row = next(e for e in data.entries if e.key.startswith("PAY-") and e.currency == Currency.USD)
    assert payment_row.readonly
    assert payment_row.category == "Ödeme - Umre Şubat"
    assert payment_row.description == "Ali Veli"
    expense_row = next(e for e in data.entries if e.key.startswith("EXP-"))
    assert expense_row.category == "Gider (Otel) - Umre Şubat"
    assert expense_row.export_row()["Kaynak"] == "Grup İşlemleri"


def test_totals_are_per_original_currency(container, ledger_data):
    data = container.company_ledger_service.build_ledger()

    assert data.totals[Currency.USD].income == 500
    assert data.totals[Currency.USD].expense == 100
    assert data.totals[Currency.TRY].income == 2000
    assert data.totals[Currency.TRY].expense == 750
    assert list(data.monthly) == ["2026-01", "2026-02"]
    assert data.monthly["2026-02"] == {Currency.TRY: CurrencyTotals(2000, 0)}


def test_group_filter_drops_manual_entries(container, ledger_data):
    group, _ = ledger_data

    data = container.company_ledger_service.build_ledger(group_id=group.group_id)

    assert all(e.readonly for e in data.entries)
    assert {e.currency for e in data.entries} == {Currency.USD}


def test_date_range_and_type_sort(container, ledger_data):
    data = container.company_ledger_service.build_ledger(
        start=date(2026, 1, 1), end=date(2026, 1, 31), sort_by="type", descending=False
    )

    types = [e.entry_type for e in data.entries]
    assert types == [EntryType.INCOME, EntryType.EXPENSE, EntryType.EXPENSE]


def test_invalid_range_and_sort_are_rejected(container):
    with pytest.raises(ValidationError):
        container.company_ledger_service.build_ledger(start=date(2026, 2, 1), end=date(2026, 1, 1))
    with pytest.raises(ValidationError):
        container.company_ledger_service.build_ledger(sort_by="amount")


def test_manual_entry_snapshot_and_crud(container, rate_provider):
    entry = container.company_entry_service.create_entry(
        {"entry_date": "2026-03-01", "entry_type": "Gelir", "amount": 10, "currency": "USD"}
    )
    assert entry.amount_try == 300.0
    assert entry.category == "Diğer"

    rate_provider.usd_try = 40.0
    container.rate_cache.refresh()
    updated = container.company_entry_service.update_entry(str(entry.entry_id), {"description": "Komisyon"})
    assert updated.description == "Komisyon"
    assert updated.amount_try == 400.0

    container.company_entry_service.delete_entry(entry.entry_id)
    with pytest.raises(NotFoundError):
        container.company_entry_service.get_entry(entry.entry_id)


def test_sar_is_not_an_entry_currency(container):
    with pytest.raises(ValidationError):
        container.company_entry_service.create_entry(
            {"entry_date": "2026-03-01", "entry_type": "Gelir", "amount": 10, "currency": "SAR"}
        )


def test_derived_keys_cannot_be_edited():
    with pytest.raises(ValidationError):
        parse_entry_key("PAY-3")
    with pytest.raises(ValidationError):
        parse_entry_key("exp-9")
    with pytest.raises(NotFoundError):
        parse_entry_key("abc")
    assert parse_entry_key(" 12 ") == 12
