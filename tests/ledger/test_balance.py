from datetime import date

import pytest

from src.tour_office.tour_office.core.enums import Currency, GroupType, RateBasis
from src.tour_office.tour_office.groups.model import FeeSchedule, Group
from src.tour_office.tour_office.ledger.balance import (
    get_balance,
    get_balance_in_reference_currency,
    paid_in_currency,
    participant_statement,
    recorded_try,
)
from src.tour_office.tour_office.ledger.conversion import convert
from src.tour_office.tour_office.participants.model import Participant
from src.tour_office.tour_office.payments.model import Payment
from src.tour_office.tour_office.rates.model import ExchangeRates, RateDefaults

RATES = ExchangeRates.build(usd_try=30.0, sar_try=8.0, source="t")


def _group(currency=Currency.USD):
    return Group(
        group_id=1,
        name="Umre",
        group_type=GroupType.UMRE,
        start_date=date(2026, 2, 1),
        end_date=None,
        capacity=10,
        currency=currency,
        fees=FeeSchedule.from_dict({"d7": {"room2": 1000}}),
    )


PARTICIPANT = Participant(participant_id=7, group_id=1, full_name="Ali", room_type=2, day_count=7, discount=50)


def _pay(pid, amount, currency, amount_try=0.0, participant_id=7):
    return Payment(pid, participant_id, date(2026, 1, 5), amount, currency, amount_try)


def test_mixed_currency_balance_in_group_currency():
    payments = [_pay(1, 500, Currency.USD, 14000), _pay(2, 1000, Currency.TRY, 1000)]

    balance = get_balance(_group(), payments, PARTICIPANT, RATES)

    assert round(balance, 2) == 416.67


def test_other_participants_payments_are_ignored():
    payments = [_pay(1, 500, Currency.USD), _pay(2, 900, Currency.USD, participant_id=8)]
    assert get_balance(_group(), payments, PARTICIPANT, RATES) == pytest.approx(450.0)


def test_overpayment_gives_negative_balance():
    payments = [_pay(1, 1000, Currency.USD)]
    assert get_balance(_group(), payments, PARTICIPANT, RATES) == pytest.approx(-50.0)


def test_paid_in_currency_is_linear():
    a = [_pay(1, 100, Currency.USD), _pay(2, 600, Currency.TRY)]
    b = [_pay(3, 40, Currency.SAR)]
    whole = paid_in_currency(a + b, Currency.SAR, RATES)
    assert whole == pytest.approx(paid_in_currency(a, Currency.SAR, RATES) + paid_in_currency(b, Currency.SAR, RATES))


def test_unknown_rates_fall_back_to_defaults():
    zero = ExchangeRates.build(usd_try=0.0, sar_try=0.0, source="none")
    defaults = RateDefaults(usd_try=34.0, sar_try=9.0)

    assert convert(1, Currency.USD, Currency.SAR, zero, defaults) == pytest.approx(34.0 / 9.0)
    balance = get_balance(_group(), [_pay(1, 3400, Currency.TRY)], PARTICIPANT, zero, defaults=defaults)
    assert balance == pytest.approx(850.0)


def test_reference_balance_uses_recorded_snapshots():
    payments = [_pay(1, 500, Currency.USD, amount_try=15500.0), _pay(2, 1000, Currency.TRY)]

    balance_try = get_balance_in_reference_currency(_group(), payments, PARTICIPANT, RATES)

    assert balance_try == pytest.approx(950 * 30 - 15500 - 1000)


def test_recorded_try_falls_back_to_amount_without_snapshot():
    assert recorded_try(_pay(1, 250, Currency.TRY, amount_try=0)) == 250
    assert recorded_try(_pay(1, 10, Currency.USD, amount_try=310)) == 310


def test_statement_labels_both_views():
    payments = [_pay(1, 500, Currency.USD, amount_try=15500.0), _pay(2, 1000, Currency.TRY, amount_try=1000.0)]

    st = participant_statement(_group(), payments, PARTICIPANT, RATES)

    assert st.fee == 950
    assert round(st.balance, 2) == 416.67
    assert st.basis == RateBasis.LIVE
    assert st.try_basis == RateBasis.RECORDED
    assert st.paid_try == 16500.0
    assert st.paid_by_currency == {Currency.USD: 500, Currency.TRY: 1000}
    assert st.to_dict()["paid_by_currency"] == {"USD": 500, "TRY": 1000}
