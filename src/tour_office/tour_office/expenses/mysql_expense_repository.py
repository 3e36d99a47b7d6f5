from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Currency, ExpenseCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, as_float, db_cursor, fetchall, fetchone
from .model import Expense
from .repository import ExpenseRepository

_COLUMNS = "expense_id, group_id, spent_on, amount, currency, amount_try, category, description"


def _row_to_expense(row: dict) -> Expense:
    return Expense(
        expense_id=int(row["expense_id"]),
        group_id=int(row["group_id"]) if row.get("group_id") is not None else None,
        spent_on=as_date(row["spent_on"]),
        amount=as_float(row["amount"]),
        currency=Currency(row.get("currency") or "TRY"),
        amount_try=as_float(row.get("amount_try")),
        category=ExpenseCategory(row.get("category") or "Diğer"),
        description=row.get("description"),
    )


def _params(e: Expense) -> tuple:
    return (e.group_id, e.spent_on, e.amount, e.currency.value, e.amount_try, e.category.value, e.description)


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(
        self,
        *,
        group_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Expense]:
        where = []
        params: list = []
        if group_id is not None:
            where.append("group_id=%s")
            params.append(group_id)
        if start is not None:
            where.append("spent_on >= %s")
            params.append(start)
        if end is not None:
            where.append("spent_on <= %s")
            params.append(end)

        sql = f"SELECT {_COLUMNS} FROM expenses"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY spent_on DESC, expense_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_expense(r) for r in fetchall(cur)]

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM expenses WHERE expense_id=%s", (expense_id,))
            row = fetchone(cur)
            return _row_to_expense(row) if row else None

    def create(self, expense: Expense) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO expenses (group_id, spent_on, amount, currency, amount_try, category, description)
                VALUES (%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(expense),
            )
            return int(cur.lastrowid)

    def update(self, expense: Expense) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE expenses
                SET group_id=%s, spent_on=%s, amount=%s, currency=%s, amount_try=%s, category=%s, description=%s
                WHERE expense_id=%s
                """,
                _params(expense) + (expense.expense_id,),
            )
            return cur.rowcount > 0

    def delete_by_id(self, expense_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM expenses WHERE expense_id=%s", (expense_id,))
            return cur.rowcount > 0
