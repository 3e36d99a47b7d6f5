from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Currency, GroupStatus, GroupType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, load_json
from .model import FeeSchedule, Group
from .repository import GroupRepository

_COLUMNS = (
    "group_id, name, group_type, start_date, end_date, capacity, currency, "
    "fees_by_duration, notes, status, archived_at"
)


def _row_to_group(row: dict) -> Group:
    return Group(
        group_id=int(row["group_id"]),
        name=row["name"],
        group_type=GroupType(row["group_type"]),
        start_date=as_date(row["start_date"]),
        end_date=as_date(row.get("end_date")),
        capacity=int(row.get("capacity") or 0),
        currency=Currency(row.get("currency") or "TRY"),
        fees=FeeSchedule.from_dict(load_json(row.get("fees_by_duration"))),
        notes=row.get("notes"),
        status=GroupStatus(row.get("status") or "planning"),
        archived_at=row.get("archived_at"),
    )


def _params(group: Group) -> tuple:
    return (
        group.name,
        group.group_type.value,
        group.start_date,
        group.end_date,
        group.capacity,
        group.currency.value,
        json.dumps(group.fees.to_dict()),
        group.notes,
        group.status.value,
    )


class MySQLGroupRepository(GroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, status: Optional[GroupStatus] = None) -> Sequence[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            if status:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM tour_groups WHERE status=%s ORDER BY start_date DESC, group_id DESC",
                    (status.value,),
                )
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM tour_groups ORDER BY start_date DESC, group_id DESC")
            return [_row_to_group(r) for r in fetchall(cur)]

    def get_by_id(self, group_id: int) -> Optional[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tour_groups WHERE group_id=%s", (group_id,))
            row = fetchone(cur)
            return _row_to_group(row) if row else None

    def create(self, group: Group) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tour_groups
                    (name, group_type, start_date, end_date, capacity, currency, fees_by_duration, notes, status)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(group),
            )
            return int(cur.lastrowid)

    def update(self, group: Group) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tour_groups
                SET name=%s, group_type=%s, start_date=%s, end_date=%s, capacity=%s,
                    currency=%s, fees_by_duration=%s, notes=%s, status=%s
                WHERE group_id=%s
                """,
                _params(group) + (group.group_id,),
            )
            return cur.rowcount > 0

    def set_status(self, group_id: int, *, status: GroupStatus, archived_at: Optional[datetime] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tour_groups SET status=%s, archived_at=%s WHERE group_id=%s",
                (status.value, archived_at, group_id),
            )
            return cur.rowcount > 0

    def delete_cascade(self, group_id: int) -> bool:
        # Children first; one transaction for the whole group.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE pay FROM payments pay
                JOIN participants p ON p.participant_id = pay.participant_id
                WHERE p.group_id=%s
                """,
                (group_id,),
            )
            cur.execute("DELETE FROM participants WHERE group_id=%s", (group_id,))
            cur.execute("DELETE FROM rooms WHERE group_id=%s", (group_id,))
            cur.execute("DELETE FROM expenses WHERE group_id=%s", (group_id,))
            cur.execute("DELETE FROM tour_groups WHERE group_id=%s", (group_id,))
            return cur.rowcount > 0
