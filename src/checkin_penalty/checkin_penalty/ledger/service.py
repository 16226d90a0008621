from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty, require_non_negative_amount
from ..core.constants import DEFAULT_LEDGER_MAX_ATTEMPTS, DEFAULT_LEDGER_RETRY_BACKOFF_SECONDS
from ..core.exceptions import NotFoundError
from ..database.transactions import run_in_transaction
from .model import DeductionResult, LedgerDeduction
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerUpdater:
    """Apply a deduction to a photographer's ledger in one store transaction.

    Each attempt re-reads the ledger row under the transaction's lock and
    writes ``balance`` and ``total_deductions`` together. Conflicting writers
    surface as ``TransientStoreError`` and the whole attempt is re-run.

    Deductions are additive. Pass ``attendance_id`` to make a deduction
    happen at most once per attendance record: the marker row is written in
    the same transaction and checked before touching the balance.
    """

    def __init__(
        self,
        ledgers: LedgerRepository,
        *,
        max_attempts: int = DEFAULT_LEDGER_MAX_ATTEMPTS,
        backoff_seconds: float = DEFAULT_LEDGER_RETRY_BACKOFF_SECONDS,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self._ledgers = ledgers
        self._max_attempts = int(max_attempts)
        self._backoff_seconds = float(backoff_seconds)
        self._sleep = sleep or time.sleep

    def apply_deduction(
        self,
        photographer_id: str,
        amount: Any,
        *,
        attendance_id: Optional[str] = None,
    ) -> DeductionResult:
        photographer_id = require_non_empty(photographer_id, "photographerId")
        amount = require_non_negative_amount(amount, "amount")

        def attempt() -> DeductionResult:
            with self._ledgers.transaction() as txn:
                ledger = txn.get_for_update(photographer_id)
                if ledger is None:
                    raise NotFoundError(f"Photographer {photographer_id} not found")

                existing = txn.get_deduction(attendance_id) if attendance_id is not None else None
                if existing is not None:
                    return DeductionResult(
                        new_balance=ledger.balance,
                        new_total_deductions=ledger.total_deductions,
                        amount=existing.amount,
                        applied=False,
                    )

                updated = ledger.deduct(amount)
                txn.save(updated)
                if attendance_id is not None:
                    txn.add_deduction(
                        LedgerDeduction(
                            attendance_id=attendance_id,
                            photographer_id=photographer_id,
                            amount=amount,
                            applied_at=now_utc(),
                        )
                    )
                return DeductionResult(
                    new_balance=updated.balance,
                    new_total_deductions=updated.total_deductions,
                    amount=amount,
                )

        result = run_in_transaction(
            attempt,
            max_attempts=self._max_attempts,
            backoff_seconds=self._backoff_seconds,
            sleep=self._sleep,
        )

        if result.applied:
            logger.info(
                "ledger.deduction.applied photographer_id=%s amount=%s balance=%s total_deductions=%s",
                photographer_id,
                amount,
                result.new_balance,
                result.new_total_deductions,
            )
        else:
            logger.info(
                "ledger.deduction.duplicate photographer_id=%s attendance_id=%s amount=%s",
                photographer_id,
                attendance_id,
                result.amount,
            )
        return result
