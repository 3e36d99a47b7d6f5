"""Example: use the ledger and the service layer without Flask.

The first part needs no database: it computes a participant balance from
in-memory records and the current exchange rates. The second part prints the
group report through the container, using the configured MySQL database.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.tour_office.tour_office.container import build_container, build_rate_cache
from src.tour_office.tour_office.core.enums import Currency, GroupType
from src.tour_office.tour_office.groups.model import FeeSchedule, Group
from src.tour_office.tour_office.ledger.balance import participant_statement
from src.tour_office.tour_office.participants.model import Participant
from src.tour_office.tour_office.payments.model import Payment


def offline_balance(settings) -> None:
    rate_cache = build_rate_cache(settings)
    rates = rate_cache.current()

    group = Group(
        group_id=1,
        name="Umre Şubat",
        group_type=GroupType.UMRE,
        start_date=date(2026, 2, 1),
        end_date=None,
        capacity=40,
        currency=Currency.USD,
        fees=FeeSchedule.from_dict({"d7": {"room2": 1000, "room3": 900, "room4": 850}}),
    )
    participant = Participant(participant_id=1, group_id=1, full_name="Ayşe Yılmaz", room_type=2, day_count=7, discount=50)
    payments = [
        Payment(1, 1, date(2026, 1, 5), 500, Currency.USD, 500 * 34),
        Payment(2, 1, date(2026, 1, 20), 1000, Currency.TRY, 1000),
    ]

    statement = participant_statement(group, payments, participant, rates, defaults=rate_cache.defaults)
    print(f"rates source={rates.source} USDTRY={rates.usd_try} SARTRY={rates.sar_try}")
    print(statement.to_dict())


def main():
    settings = importlib.import_module(get_settings_module())
    offline_balance(settings)

    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    for row in container.group_report_service.build_group_report():
        print(row.to_dict())


if __name__ == "__main__":
    main()
