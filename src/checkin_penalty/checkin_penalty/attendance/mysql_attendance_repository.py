from __future__ import annotations

from decimal import Decimal

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def stamp_lateness(self, record_id: str, *, is_late: bool, late_deduction_applied: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET is_late=%s, late_deduction_applied=%s
                WHERE id=%s
                """,
                (1 if is_late else 0, late_deduction_applied, record_id),
            )
            # rowcount is 0 when the values already match; re-check existence.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS present FROM attendance_records WHERE id=%s", (record_id,))
            return fetchone(cur) is not None
