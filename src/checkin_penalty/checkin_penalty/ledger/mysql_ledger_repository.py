from __future__ import annotations

from contextlib import contextmanager
from datetime import timezone
from decimal import Decimal
from typing import Iterator, Optional

from ..common.datetime_utils import to_utc_instant
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_transaction, fetchone
from .model import LedgerDeduction, PhotographerLedger
from .repository import LedgerRepository, LedgerTransaction


def _to_ledger(r: dict) -> PhotographerLedger:
    return PhotographerLedger(
        photographer_id=str(r["photographer_id"]),
        balance=Decimal(r.get("balance") or 0),
        total_deductions=Decimal(r.get("total_deductions") or 0),
    )


class MySQLLedgerTransaction(LedgerTransaction):
    def __init__(self, cur):
        self._cur = cur

    def get_for_update(self, photographer_id: str) -> Optional[PhotographerLedger]:
        self._cur.execute(
            """
            SELECT photographer_id, balance, total_deductions
            FROM photographers_data
            WHERE photographer_id=%s
            FOR UPDATE
            """,
            (photographer_id,),
        )
        r = fetchone(self._cur)
        return _to_ledger(r) if r else None

    def save(self, ledger: PhotographerLedger) -> None:
        self._cur.execute(
            """
            UPDATE photographers_data
            SET balance=%s, total_deductions=%s
            WHERE photographer_id=%s
            """,
            (ledger.balance, ledger.total_deductions, ledger.photographer_id),
        )

    def get_deduction(self, attendance_id: str) -> Optional[LedgerDeduction]:
        self._cur.execute(
            """
            SELECT attendance_id, photographer_id, amount, applied_at
            FROM ledger_deductions
            WHERE attendance_id=%s
            FOR UPDATE
            """,
            (attendance_id,),
        )
        r = fetchone(self._cur)
        if not r:
            return None
        return LedgerDeduction(
            attendance_id=str(r["attendance_id"]),
            photographer_id=str(r["photographer_id"]),
            amount=Decimal(r["amount"]),
            applied_at=to_utc_instant(r["applied_at"], "applied_at"),
        )

    def add_deduction(self, deduction: LedgerDeduction) -> None:
        # DATETIME has no zone; store UTC wall time.
        applied_at = deduction.applied_at.astimezone(timezone.utc).replace(tzinfo=None)
        self._cur.execute(
            """
            INSERT INTO ledger_deductions(attendance_id, photographer_id, amount, applied_at)
            VALUES(%s,%s,%s,%s)
            """,
            (deduction.attendance_id, deduction.photographer_id, deduction.amount, applied_at),
        )


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[MySQLLedgerTransaction]:
        with db_transaction(self._conn_factory) as cur:
            yield MySQLLedgerTransaction(cur)

