from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import EventConfig
from .repository import EventRepository


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[EventConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, event_date_time, required_arrival_time_offset_minutes,
                       grace_period_minutes, late_deduction_amount
                FROM events
                WHERE event_id=%s
                """,
                (event_id,),
            )
            r = fetchone(cur)
            return EventConfig.from_row(r) if r else None
