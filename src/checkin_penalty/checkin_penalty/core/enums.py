from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Kind of attendance record written by the check-in app."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class CheckInStatus(str, Enum):
    """Terminal state of one processed attendance record."""

    SKIPPED = "skipped"
    INVALID = "invalid"
    EVENT_NOT_FOUND = "event_not_found"
    RECORD_NOT_FOUND = "record_not_found"
    ON_TIME = "on_time"
    LATE_DEDUCTED = "late_deducted"
    ALREADY_APPLIED = "already_applied"
    LEDGER_NOT_FOUND = "ledger_not_found"
    DEDUCTION_FAILED = "deduction_failed"
    FAILED = "failed"
