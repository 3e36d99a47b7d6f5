from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .company.mysql_company_repository import MySQLCompanyEntryRepository
from .company.repository import CompanyEntryRepository
from .company.service import CompanyEntryService, CompanyLedgerService
from .core.constants import (
    DEFAULT_RATE_HTTP_TIMEOUT,
    DEFAULT_RATE_REFRESH_SECONDS,
    DEFAULT_SARTRY,
    DEFAULT_USDTRY,
)
from .database.connection import DBConfig, DatabaseConnection
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.repository import ExpenseRepository
from .expenses.service import ExpenseService
from .groups.mysql_group_repository import MySQLGroupRepository
from .groups.repository import GroupRepository
from .groups.service import GroupService
from .ledger.calculator.standard_calculator import StandardFeeCalculator
from .ledger.service import GroupReportService
from .participants.mysql_participant_repository import MySQLParticipantRepository
from .participants.repository import ParticipantRepository
from .participants.service import ParticipantService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .rates.cache import RateCache
from .rates.model import RateDefaults
from .rates.provider import RateProvider
from .rooms.mysql_room_repository import MySQLRoomRepository
from .rooms.repository import RoomRepository
from .rooms.service import RoomService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    rate_cache: RateCache

    users_repo: UserRepository
    groups_repo: GroupRepository
    participants_repo: ParticipantRepository
    rooms_repo: RoomRepository
    payments_repo: PaymentRepository
    expenses_repo: ExpenseRepository
    company_repo: CompanyEntryRepository

    auth_service: AuthService
    user_service: UserService
    group_service: GroupService
    participant_service: ParticipantService
    room_service: RoomService
    payment_service: PaymentService
    expense_service: ExpenseService
    company_entry_service: CompanyEntryService
    company_ledger_service: CompanyLedgerService
    group_report_service: GroupReportService


def build_rate_cache(settings: Any = None) -> RateCache:
    provider = RateProvider(
        timeout=float(getattr(settings, "RATE_HTTP_TIMEOUT", DEFAULT_RATE_HTTP_TIMEOUT)),
        enabled=bool(getattr(settings, "RATE_SOURCES_ENABLED", True)),
    )
    defaults = RateDefaults(
        usd_try=float(getattr(settings, "DEFAULT_USDTRY", DEFAULT_USDTRY)),
        sar_try=float(getattr(settings, "DEFAULT_SARTRY", DEFAULT_SARTRY)),
    )
    return RateCache(
        provider,
        refresh_seconds=float(getattr(settings, "RATE_REFRESH_SECONDS", DEFAULT_RATE_REFRESH_SECONDS)),
        defaults=defaults,
    )


def assemble(
    *,
    users_repo: UserRepository,
    groups_repo: GroupRepository,
    participants_repo: ParticipantRepository,
    rooms_repo: RoomRepository,
    payments_repo: PaymentRepository,
    expenses_repo: ExpenseRepository,
    company_repo: CompanyEntryRepository,
    rate_cache: RateCache,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""

    calculator = StandardFeeCalculator()

    return Container(
        conn=conn,
        rate_cache=rate_cache,
        users_repo=users_repo,
        groups_repo=groups_repo,
        participants_repo=participants_repo,
        rooms_repo=rooms_repo,
        payments_repo=payments_repo,
        expenses_repo=expenses_repo,
        company_repo=company_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        group_service=GroupService(groups_repo, participants_repo, payments_repo),
        participant_service=ParticipantService(participants_repo, groups_repo, rooms_repo),
        room_service=RoomService(rooms_repo, groups_repo, participants_repo),
        payment_service=PaymentService(payments_repo, participants_repo, rate_cache),
        expense_service=ExpenseService(expenses_repo, groups_repo, rate_cache),
        company_entry_service=CompanyEntryService(company_repo, rate_cache),
        company_ledger_service=CompanyLedgerService(
            company_repo, payments_repo, expenses_repo, participants_repo, groups_repo
        ),
        group_report_service=GroupReportService(
            groups_repo, participants_repo, payments_repo, expenses_repo, rate_cache, calculator=calculator
        ),
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        groups_repo=MySQLGroupRepository(conn),
        participants_repo=MySQLParticipantRepository(conn),
        rooms_repo=MySQLRoomRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        expenses_repo=MySQLExpenseRepository(conn),
        company_repo=MySQLCompanyEntryRepository(conn),
        rate_cache=build_rate_cache(settings),
    )
