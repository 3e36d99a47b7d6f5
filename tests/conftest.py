from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime
from types import SimpleNamespace
from typing import Optional

import pytest

from src.tour_office.tour_office.container import assemble
from src.tour_office.tour_office.core.enums import Currency, GroupStatus, GroupType, Role
from src.tour_office.tour_office.groups.model import FeeSchedule, Group
from src.tour_office.tour_office.participants.model import Participant
from src.tour_office.tour_office.payments.model import Payment
from src.tour_office.tour_office.rates.cache import RateCache
from src.tour_office.tour_office.rates.model import ExchangeRates
from src.tour_office.tour_office.users.model import User


class Store:
    """Shared in-memory tables backing the fake repositories."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.groups: dict[int, Group] = {}
        self.participants: dict[int, Participant] = {}
        self.rooms: dict = {}
        self.payments: dict[int, Payment] = {}
        self.expenses: dict = {}
        self.entries: dict = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)


def _in_range(day: date, start: Optional[date], end: Optional[date]) -> bool:
    return (start is None or day >= start) and (end is None or day <= end)


class InMemoryUsers:
    def __init__(self, store: Store):
        self._s = store

    def get_by_id(self, user_id):
        return self._s.users.get(user_id)

    def get_by_username(self, username):
        return next((u for u in self._s.users.values() if u.username == username), None)

    def list_all(self):
        return sorted(self._s.users.values(), key=lambda u: u.user_id, reverse=True)

    def create_user(self, *, full_name, username, password_hash, role):
        uid = self._s.next_id()
        self._s.users[uid] = User(uid, full_name, username, password_hash, role)
        return uid

    def delete_by_id(self, user_id):
        return self._s.users.pop(user_id, None) is not None


class InMemoryGroups:
    def __init__(self, store: Store):
        self._s = store

    def list_all(self, *, status=None):
        items = [g for g in self._s.groups.values() if status is None or g.status == status]
        return sorted(items, key=lambda g: (g.start_date, g.group_id), reverse=True)

    def get_by_id(self, group_id):
        return self._s.groups.get(group_id)

    def create(self, group):
        gid = self._s.next_id()
        self._s.groups[gid] = replace(group, group_id=gid)
        return gid

    def update(self, group):
        if group.group_id not in self._s.groups:
            return False
        self._s.groups[group.group_id] = group
        return True

    def set_status(self, group_id, *, status, archived_at=None):
        group = self._s.groups.get(group_id)
        if not group:
            return False
        self._s.groups[group_id] = replace(group, status=status, archived_at=archived_at)
        return True

    def delete_cascade(self, group_id):
        member_ids = {p.participant_id for p in self._s.participants.values() if p.group_id == group_id}
        self._s.payments = {k: v for k, v in self._s.payments.items() if v.participant_id not in member_ids}
        self._s.participants = {k: v for k, v in self._s.participants.items() if v.group_id != group_id}
        self._s.rooms = {k: v for k, v in self._s.rooms.items() if v.group_id != group_id}
        self._s.expenses = {k: v for k, v in self._s.expenses.items() if v.group_id != group_id}
        return self._s.groups.pop(group_id, None) is not None


class InMemoryParticipants:
    def __init__(self, store: Store):
        self._s = store

    def list(self, *, group_id=None, search=None):
        items = [p for p in self._s.participants.values() if group_id is None or p.group_id == group_id]
        if search:
            needle = search.lower()
            items = [
                p
                for p in items
                if any(needle in (v or "").lower() for v in (p.full_name, p.phone, p.passport_no, p.id_number))
            ]
        return sorted(items, key=lambda p: p.full_name)

    def get_by_id(self, participant_id):
        return self._s.participants.get(participant_id)

    def count_by_group(self, group_id):
        return sum(1 for p in self._s.participants.values() if p.group_id == group_id)

    def create(self, participant):
        pid = self._s.next_id()
        self._s.participants[pid] = replace(participant, participant_id=pid)
        return pid

    def update(self, participant):
        if participant.participant_id not in self._s.participants:
            return False
        self._s.participants[participant.participant_id] = participant
        return True

    def set_room(self, participant_id, *, room_id):
        p = self._s.participants.get(participant_id)
        if not p:
            return False
        self._s.participants[participant_id] = replace(p, room_id=room_id)
        return True

    def delete_by_id(self, participant_id):
        self._s.payments = {k: v for k, v in self._s.payments.items() if v.participant_id != participant_id}
        return self._s.participants.pop(participant_id, None) is not None


class InMemoryRooms:
    def __init__(self, store: Store):
        self._s = store

    def list_by_group(self, group_id):
        return sorted((r for r in self._s.rooms.values() if r.group_id == group_id), key=lambda r: (r.name, r.room_id))

    def get_by_id(self, room_id):
        return self._s.rooms.get(room_id)

    def create(self, room):
        rid = self._s.next_id()
        self._s.rooms[rid] = replace(room, room_id=rid)
        return rid

    def update(self, room):
        if room.room_id not in self._s.rooms:
            return False
        self._s.rooms[room.room_id] = room
        return True

    def delete_by_id(self, room_id):
        for pid, p in list(self._s.participants.items()):
            if p.room_id == room_id:
                self._s.participants[pid] = replace(p, room_id=None)
        return self._s.rooms.pop(room_id, None) is not None


class InMemoryPayments:
    def __init__(self, store: Store):
        self._s = store

    def list(self, *, participant_id=None, group_id=None, start=None, end=None):
        out = []
        for pay in self._s.payments.values():
            if participant_id is not None and pay.participant_id != participant_id:
                continue
            if group_id is not None:
                owner = self._s.participants.get(pay.participant_id)
                if not owner or owner.group_id != group_id:
                    continue
            if _in_range(pay.paid_on, start, end):
                out.append(pay)
        return sorted(out, key=lambda p: (p.paid_on, p.payment_id), reverse=True)

    def get_by_id(self, payment_id):
        return self._s.payments.get(payment_id)

    def create(self, payment):
        pid = self._s.next_id()
        self._s.payments[pid] = replace(payment, payment_id=pid)
        return pid

    def update(self, payment):
        if payment.payment_id not in self._s.payments:
            return False
        self._s.payments[payment.payment_id] = payment
        return True

    def delete_by_id(self, payment_id):
        return self._s.payments.pop(payment_id, None) is not None


class InMemoryExpenses:
    def __init__(self, store: Store):
        self._s = store

    def list(self, *, group_id=None, start=None, end=None):
        out = [
            e
            for e in self._s.expenses.values()
            if (group_id is None or e.group_id == group_id) and _in_range(e.spent_on, start, end)
        ]
        return sorted(out, key=lambda e: (e.spent_on, e.expense_id), reverse=True)

    def get_by_id(self, expense_id):
        return self._s.expenses.get(expense_id)

    def create(self, expense):
        eid = self._s.next_id()
        self._s.expenses[eid] = replace(expense, expense_id=eid)
        return eid

    def update(self, expense):
        if expense.expense_id not in self._s.expenses:
            return False
        self._s.expenses[expense.expense_id] = expense
        return True

    def delete_by_id(self, expense_id):
        return self._s.expenses.pop(expense_id, None) is not None


class InMemoryCompanyEntries:
    def __init__(self, store: Store):
        self._s = store

    def list(self, *, start=None, end=None):
        out = [e for e in self._s.entries.values() if _in_range(e.entry_date, start, end)]
        return sorted(out, key=lambda e: (e.entry_date, e.entry_id), reverse=True)

    def get_by_id(self, entry_id):
        return self._s.entries.get(entry_id)

    def create(self, entry):
        eid = self._s.next_id()
        self._s.entries[eid] = replace(entry, entry_id=eid)
        return eid

    def update(self, entry):
        if entry.entry_id not in self._s.entries:
            return False
        self._s.entries[entry.entry_id] = entry
        return True

    def delete_by_id(self, entry_id):
        return self._s.entries.pop(entry_id, None) is not None


class StaticRateProvider:
    """Stands in for RateProvider: fixed rates, counts fetches."""

    def __init__(self, usd_try: float = 0.0, sar_try: float = 0.0, source: str = "static"):
        self.usd_try = usd_try
        self.sar_try = sar_try
        self.source = source
        self.calls = 0

    def get_rates(self) -> ExchangeRates:
        self.calls += 1
        return ExchangeRates.build(usd_try=self.usd_try, sar_try=self.sar_try, source=self.source)

    def historical_rate(self, on, base) -> float:
        return {Currency.TRY: 1.0, Currency.USD: self.usd_try, Currency.SAR: self.sar_try}[base]


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def repos(store):
    return SimpleNamespace(
        users=InMemoryUsers(store),
        groups=InMemoryGroups(store),
        participants=InMemoryParticipants(store),
        rooms=InMemoryRooms(store),
        payments=InMemoryPayments(store),
        expenses=InMemoryExpenses(store),
        company=InMemoryCompanyEntries(store),
    )


@pytest.fixture
def rate_provider():
    return StaticRateProvider(usd_try=30.0, sar_try=8.0)


@pytest.fixture
def rate_cache(rate_provider):
    return RateCache(rate_provider, refresh_seconds=600)


@pytest.fixture
def container(repos, rate_cache):
    return assemble(
        users_repo=repos.users,
        groups_repo=repos.groups,
        participants_repo=repos.participants,
        rooms_repo=repos.rooms,
        payments_repo=repos.payments,
        expenses_repo=repos.expenses,
        company_repo=repos.company,
        rate_cache=rate_cache,
    )


@pytest.fixture
def fixed_now(monkeypatch):
    now = datetime(2026, 3, 1, 10, 0, 0)
    monkeypatch.setattr("src.tour_office.tour_office.common.datetime_utils.now_local", lambda: now)
    monkeypatch.setattr("src.tour_office.tour_office.groups.service.now_local", lambda: now)
    return now


@pytest.fixture
def add_group(repos):
    def _add(**overrides) -> Group:
        data = dict(
            group_id=0,
            name="Umre Şubat",
            group_type=GroupType.UMRE,
            start_date=date(2026, 2, 1),
            end_date=date(2026, 2, 15),
            capacity=10,
            currency=Currency.USD,
            fees=FeeSchedule.from_dict({"d7": {"room2": 1000, "room3": 900, "room4": 850}}),
            status=GroupStatus.ACTIVE,
        )
        data.update(overrides)
        gid = repos.groups.create(Group(**data))
        return repos.groups.get_by_id(gid)

    return _add


@pytest.fixture
def add_participant(repos):
    def _add(group: Group, **overrides) -> Participant:
        data = dict(participant_id=0, group_id=group.group_id, full_name="Ali Veli", room_type=2, day_count=7)
        data.update(overrides)
        pid = repos.participants.create(Participant(**data))
        return repos.participants.get_by_id(pid)

    return _add


@pytest.fixture
def add_payment(repos):
    def _add(participant: Participant, amount: float, currency: Currency = Currency.TRY, **overrides) -> Payment:
        data = dict(
            payment_id=0,
            participant_id=participant.participant_id,
            paid_on=date(2026, 1, 10),
            amount=amount,
            currency=currency,
            amount_try=amount if currency == Currency.TRY else amount * 30,
        )
        data.update(overrides)
        pid = repos.payments.create(Payment(**data))
        return repos.payments.get_by_id(pid)

    return _add


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.tour_office.tour_office.main import create_app

    flask_app = create_app(container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(role: Role = Role.ADMIN, user_id: int = 1):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["name"] = "Test"
            sess["username"] = "test"
            sess["role"] = role.value
        return client

    return _login
