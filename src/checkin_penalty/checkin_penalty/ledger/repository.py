from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Optional, Protocol

from .model import LedgerDeduction, PhotographerLedger


class LedgerTransaction(Protocol):
    """Reads and writes scoped to one open store transaction.

    Rows read through ``get_for_update`` are protected against concurrent
    writers until the transaction ends: a competing writer either blocks or the
    commit fails with ``TransientStoreError``.
    """

    def get_for_update(self, photographer_id: str) -> Optional[PhotographerLedger]:
        raise NotImplementedError

    def save(self, ledger: PhotographerLedger) -> None:
        raise NotImplementedError

    def get_deduction(self, attendance_id: str) -> Optional[LedgerDeduction]:
        raise NotImplementedError

    def add_deduction(self, deduction: LedgerDeduction) -> None:
        raise NotImplementedError


class LedgerRepository(Protocol):
    def transaction(self) -> AbstractContextManager[LedgerTransaction]:
        """Commit when the block exits normally, roll back when it raises."""

        raise NotImplementedError
