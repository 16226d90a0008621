from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from ..common.datetime_utils import to_utc_instant
from ..common.validators import require_non_negative_int
from ..events.model import EventConfig


@dataclass(frozen=True)
class TimeWindowVerdict:
    is_late: bool
    required_arrival_time: datetime
    grace_period_end_time: datetime


@dataclass
class TimeWindowEvaluator:
    """Decide whether a check-in falls after the event's grace window.

    required arrival = event start - offset; the grace window ends ``grace``
    minutes after that. Arriving exactly at the end of the window is on time.
    """

    def evaluate(
        self,
        *,
        event_date_time: Any,
        required_arrival_time_offset_minutes: Any,
        grace_period_minutes: Any,
        check_in_time: Any,
    ) -> TimeWindowVerdict:
        event_at = to_utc_instant(event_date_time, "eventDateTime")
        checked_in_at = to_utc_instant(check_in_time, "checkInTime")
        offset = require_non_negative_int(required_arrival_time_offset_minutes, "requiredArrivalTimeOffsetMinutes")
        grace = require_non_negative_int(grace_period_minutes, "gracePeriodMinutes")

        required_arrival_time = event_at - timedelta(minutes=offset)
        grace_period_end_time = required_arrival_time + timedelta(minutes=grace)
        return TimeWindowVerdict(
            is_late=checked_in_at > grace_period_end_time,
            required_arrival_time=required_arrival_time,
            grace_period_end_time=grace_period_end_time,
        )

    def evaluate_for_event(self, event: EventConfig, check_in_time: datetime) -> TimeWindowVerdict:
        return self.evaluate(
            event_date_time=event.event_date_time,
            required_arrival_time_offset_minutes=event.required_arrival_time_offset_minutes,
            grace_period_minutes=event.grace_period_minutes,
            check_in_time=check_in_time,
        )
