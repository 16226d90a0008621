from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from ..common.datetime_utils import to_utc_instant
from ..common.validators import require_non_negative_amount, require_non_negative_int
from ..core.constants import (
    DEFAULT_GRACE_PERIOD_MINUTES,
    DEFAULT_LATE_DEDUCTION_AMOUNT,
    DEFAULT_REQUIRED_ARRIVAL_OFFSET_MINUTES,
)


@dataclass(frozen=True)
class EventConfig:
    """Timing and penalty settings of one scheduled event (read-only here)."""

    event_id: str
    event_date_time: datetime
    required_arrival_time_offset_minutes: int = DEFAULT_REQUIRED_ARRIVAL_OFFSET_MINUTES
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES
    late_deduction_amount: Decimal = DEFAULT_LATE_DEDUCTION_AMOUNT

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "EventConfig":
        # NULL settings mean "not configured" and count as 0.
        return cls(
            event_id=str(row["event_id"]),
            event_date_time=to_utc_instant(row["event_date_time"], "event_date_time"),
            required_arrival_time_offset_minutes=require_non_negative_int(
                row.get("required_arrival_time_offset_minutes"),
                "required_arrival_time_offset_minutes",
                default=DEFAULT_REQUIRED_ARRIVAL_OFFSET_MINUTES,
            ),
            grace_period_minutes=require_non_negative_int(
                row.get("grace_period_minutes"), "grace_period_minutes", default=DEFAULT_GRACE_PERIOD_MINUTES
            ),
            late_deduction_amount=require_non_negative_amount(
                row.get("late_deduction_amount"), "late_deduction_amount", default=DEFAULT_LATE_DEDUCTION_AMOUNT
            ),
        )
