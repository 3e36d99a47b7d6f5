from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Room
from .repository import RoomRepository


def _row_to_room(row: dict) -> Room:
    return Room(
        room_id=int(row["room_id"]),
        group_id=int(row["group_id"]),
        name=row["name"],
        room_type=int(row["room_type"]),
    )


class MySQLRoomRepository(RoomRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_group(self, group_id: int) -> Sequence[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT room_id, group_id, name, room_type FROM rooms WHERE group_id=%s ORDER BY name, room_id",
                (group_id,),
            )
            return [_row_to_room(r) for r in fetchall(cur)]

    def get_by_id(self, room_id: int) -> Optional[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT room_id, group_id, name, room_type FROM rooms WHERE room_id=%s", (room_id,))
            row = fetchone(cur)
            return _row_to_room(row) if row else None

    def create(self, room: Room) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO rooms (group_id, name, room_type) VALUES (%s,%s,%s)",
                (room.group_id, room.name, room.room_type),
            )
            return int(cur.lastrowid)

    def update(self, room: Room) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE rooms SET name=%s, room_type=%s WHERE room_id=%s",
                (room.name, room.room_type, room.room_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, room_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Occupants become unassigned.
            cur.execute("UPDATE participants SET room_id=NULL WHERE room_id=%s", (room_id,))
            cur.execute("DELETE FROM rooms WHERE room_id=%s", (room_id,))
            return cur.rowcount > 0
