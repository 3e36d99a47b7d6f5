from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Currency, PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, as_float, db_cursor, fetchall, fetchone
from .model import Payment
from .repository import PaymentRepository

_COLUMNS = "pay.payment_id, pay.participant_id, pay.paid_on, pay.amount, pay.currency, pay.amount_try, pay.method, pay.notes"


def _row_to_payment(row: dict) -> Payment:
    return Payment(
        payment_id=int(row["payment_id"]),
        participant_id=int(row["participant_id"]),
        paid_on=as_date(row["paid_on"]),
        amount=as_float(row["amount"]),
        currency=Currency(row.get("currency") or "TRY"),
        amount_try=as_float(row.get("amount_try")),
        method=PaymentMethod(row.get("method") or "Nakit"),
        notes=row.get("notes"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(
        self,
        *,
        participant_id: Optional[int] = None,
        group_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Payment]:
        where = []
        params: list = []
        if participant_id is not None:
            where.append("pay.participant_id=%s")
            params.append(participant_id)
        if group_id is not None:
            where.append("p.group_id=%s")
            params.append(group_id)
        if start is not None:
            where.append("pay.paid_on >= %s")
            params.append(start)
        if end is not None:
            where.append("pay.paid_on <= %s")
            params.append(end)

        sql = (
            f"SELECT {_COLUMNS} FROM payments pay "
            "JOIN participants p ON p.participant_id = pay.participant_id"
        )
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY pay.paid_on DESC, pay.payment_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_payment(r) for r in fetchall(cur)]

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments pay WHERE pay.payment_id=%s", (payment_id,))
            row = fetchone(cur)
            return _row_to_payment(row) if row else None

    def create(self, payment: Payment) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments (participant_id, paid_on, amount, currency, amount_try, method, notes)
                VALUES (%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payment.participant_id,
                    payment.paid_on,
                    payment.amount,
                    payment.currency.value,
                    payment.amount_try,
                    payment.method.value,
                    payment.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, payment: Payment) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payments
                SET participant_id=%s, paid_on=%s, amount=%s, currency=%s, amount_try=%s, method=%s, notes=%s
                WHERE payment_id=%s
                """,
                (
                    payment.participant_id,
                    payment.paid_on,
                    payment.amount,
                    payment.currency.value,
                    payment.amount_try,
                    payment.method.value,
                    payment.notes,
                    payment.payment_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE payment_id=%s", (payment_id,))
            return cur.rowcount > 0
