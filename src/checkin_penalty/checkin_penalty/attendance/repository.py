from __future__ import annotations

from decimal import Decimal
from typing import Protocol


class AttendanceRepository(Protocol):
    def stamp_lateness(self, record_id: str, *, is_late: bool, late_deduction_applied: Decimal) -> bool:
        """Partial update of ``is_late``/``late_deduction_applied``; False if the row is gone."""

        raise NotImplementedError
