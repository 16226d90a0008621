from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class PhotographerLedger:
    """Domain entity: a photographer's running balance."""

    photographer_id: str
    balance: Decimal = Decimal("0")
    total_deductions: Decimal = Decimal("0")

    def deduct(self, amount: Decimal) -> "PhotographerLedger":
        return replace(
            self,
            balance=self.balance - amount,
            total_deductions=self.total_deductions + amount,
        )


@dataclass(frozen=True)
class LedgerDeduction:
    """Marks that the deduction for one attendance record has been committed."""

    attendance_id: str
    photographer_id: str
    amount: Decimal
    applied_at: datetime


@dataclass(frozen=True)
class DeductionResult:
    new_balance: Decimal
    new_total_deductions: Decimal
    # What this attendance record was charged: the stored amount for a duplicate.
    amount: Decimal
    applied: bool = True
