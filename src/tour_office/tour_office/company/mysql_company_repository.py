from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Currency, EntryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, as_float, db_cursor, fetchall, fetchone
from .model import CompanyEntry
from .repository import CompanyEntryRepository

_COLUMNS = "entry_id, entry_date, entry_type, amount, currency, amount_try, category, description"


def _row_to_entry(row: dict) -> CompanyEntry:
    return CompanyEntry(
        entry_id=int(row["entry_id"]),
        entry_date=as_date(row["entry_date"]),
        entry_type=EntryType(row["entry_type"]),
        amount=as_float(row["amount"]),
        currency=Currency(row.get("currency") or "TRY"),
        amount_try=as_float(row.get("amount_try")),
        category=row.get("category") or "Diğer",
        description=row.get("description"),
    )


def _params(e: CompanyEntry) -> tuple:
    return (e.entry_date, e.entry_type.value, e.amount, e.currency.value, e.amount_try, e.category, e.description)


class MySQLCompanyEntryRepository(CompanyEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[CompanyEntry]:
        where = []
        params: list = []
        if start is not None:
            where.append("entry_date >= %s")
            params.append(start)
        if end is not None:
            where.append("entry_date <= %s")
            params.append(end)

        sql = f"SELECT {_COLUMNS} FROM company_entries"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY entry_date DESC, entry_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: int) -> Optional[CompanyEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM company_entries WHERE entry_id=%s", (entry_id,))
            row = fetchone(cur)
            return _row_to_entry(row) if row else None

    def create(self, entry: CompanyEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO company_entries (entry_date, entry_type, amount, currency, amount_try, category, description)
                VALUES (%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(entry),
            )
            return int(cur.lastrowid)

    def update(self, entry: CompanyEntry) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE company_entries
                SET entry_date=%s, entry_type=%s, amount=%s, currency=%s, amount_try=%s, category=%s, description=%s
                WHERE entry_id=%s
                """,
                _params(entry) + (entry.entry_id,),
            )
            return cur.rowcount > 0

    def delete_by_id(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM company_entries WHERE entry_id=%s", (entry_id,))
            return cur.rowcount > 0
