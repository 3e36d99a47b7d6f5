from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Gender
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, as_float, db_cursor, fetchall, fetchone
from .model import Participant
from .repository import ParticipantRepository

_COLUMNS = (
    "participant_id, group_id, full_name, phone, email, id_number, passport_no, "
    "passport_valid_until, birth_date, gender, room_type, day_count, discount, room_id, reference"
)


def _row_to_participant(row: dict) -> Participant:
    return Participant(
        participant_id=int(row["participant_id"]),
        group_id=int(row["group_id"]),
        full_name=row["full_name"],
        phone=row.get("phone"),
        email=row.get("email"),
        id_number=row.get("id_number"),
        passport_no=row.get("passport_no"),
        passport_valid_until=as_date(row.get("passport_valid_until")),
        birth_date=as_date(row.get("birth_date")),
        gender=Gender(row.get("gender") or "Mr"),
        room_type=int(row["room_type"]),
        day_count=int(row["day_count"]),
        discount=as_float(row.get("discount")),
        room_id=int(row["room_id"]) if row.get("room_id") is not None else None,
        reference=row.get("reference"),
    )


def _params(p: Participant) -> tuple:
    return (
        p.group_id,
        p.full_name,
        p.phone,
        p.email,
        p.id_number,
        p.passport_no,
        p.passport_valid_until,
        p.birth_date,
        p.gender.value,
        p.room_type,
        p.day_count,
        p.discount,
        p.room_id,
        p.reference,
    )


class MySQLParticipantRepository(ParticipantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(self, *, group_id: Optional[int] = None, search: Optional[str] = None) -> Sequence[Participant]:
        where = []
        params: list = []
        if group_id is not None:
            where.append("group_id=%s")
            params.append(group_id)
        if search:
            like = f"%{search}%"
            where.append("(full_name LIKE %s OR phone LIKE %s OR passport_no LIKE %s OR id_number LIKE %s)")
            params.extend([like, like, like, like])

        sql = f"SELECT {_COLUMNS} FROM participants"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY full_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_participant(r) for r in fetchall(cur)]

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM participants WHERE participant_id=%s", (participant_id,))
            row = fetchone(cur)
            return _row_to_participant(row) if row else None

    def count_by_group(self, group_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS c FROM participants WHERE group_id=%s", (group_id,))
            row = fetchone(cur)
            return int(row["c"]) if row else 0

    def create(self, participant: Participant) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO participants
                    (group_id, full_name, phone, email, id_number, passport_no, passport_valid_until,
                     birth_date, gender, room_type, day_count, discount, room_id, reference)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(participant),
            )
            return int(cur.lastrowid)

    def update(self, participant: Participant) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE participants
                SET group_id=%s, full_name=%s, phone=%s, email=%s, id_number=%s, passport_no=%s,
                    passport_valid_until=%s, birth_date=%s, gender=%s, room_type=%s, day_count=%s,
                    discount=%s, room_id=%s, reference=%s
                WHERE participant_id=%s
                """,
                _params(participant) + (participant.participant_id,),
            )
            return cur.rowcount > 0

    def set_room(self, participant_id: int, *, room_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE participants SET room_id=%s WHERE participant_id=%s", (room_id, participant_id))
            return cur.rowcount > 0

    def delete_by_id(self, participant_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM participants WHERE participant_id=%s", (participant_id,))
            return cur.rowcount > 0
