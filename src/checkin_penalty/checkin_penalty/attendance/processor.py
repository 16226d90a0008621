from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import AttendanceType, CheckInStatus
from ..core.exceptions import NotFoundError, TransientStoreError, ValidationError
from ..events.repository import EventRepository
from ..ledger.model import DeductionResult
from ..ledger.service import LedgerUpdater
from ..notifications.dispatcher import NotificationDispatcher
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .time_window import TimeWindowEvaluator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInOutcome:
    status: CheckInStatus
    record_id: Optional[str] = None
    is_late: Optional[bool] = None
    deduction: Optional[DeductionResult] = None
    detail: Optional[str] = None


class CheckInProcessor:
    """Process one newly created attendance record.

    received -> validated -> evaluated -> done (on time), or
    evaluated -> stamp record -> deduct from ledger -> notify -> done (late).

    The record stamp and the ledger transaction are separate writes, stamp
    first. A crash between them leaves a record marked late without a
    deduction; re-delivering the record repairs it, and the per-record
    deduction marker keeps the re-delivery from deducting twice.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        events: EventRepository,
        ledger: LedgerUpdater,
        notifier: NotificationDispatcher,
        *,
        evaluator: Optional[TimeWindowEvaluator] = None,
    ):
        self._attendance = attendance
        self._events = events
        self._ledger = ledger
        self._notifier = notifier
        self._evaluator = evaluator or TimeWindowEvaluator()

    def handle(self, payload: Optional[Mapping[str, Any]], *, record_id: Optional[str] = None) -> CheckInOutcome:
        """Invocation boundary: never raises, every failure ends up in the log."""

        rid = record_id or (payload.get("id") if isinstance(payload, Mapping) else None)
        try:
            return self.process(payload, record_id=record_id)
        except ValidationError as exc:
            logger.warning("checkin.aborted record_id=%s reason=%s", rid, exc)
            return CheckInOutcome(status=CheckInStatus.INVALID, record_id=rid, detail=str(exc))
        except Exception as exc:
            logger.exception("checkin.failed record_id=%s", rid)
            return CheckInOutcome(status=CheckInStatus.FAILED, record_id=rid, detail=str(exc))

    def process(self, payload: Optional[Mapping[str, Any]], *, record_id: Optional[str] = None) -> CheckInOutcome:
        if not payload or not isinstance(payload, Mapping):
            raise ValidationError("No attendance data found")

        if payload.get("type") != AttendanceType.CHECK_IN:
            rid = record_id or payload.get("id")
            logger.info("checkin.skipped record_id=%s type=%s", rid, payload.get("type"))
            return CheckInOutcome(status=CheckInStatus.SKIPPED, record_id=rid)

        record = AttendanceRecord.from_payload(payload, record_id=record_id)

        event = self._events.get_by_id(record.event_id)
        if event is None:
            logger.warning("checkin.event_not_found record_id=%s event_id=%s", record.id, record.event_id)
            return CheckInOutcome(
                status=CheckInStatus.EVENT_NOT_FOUND,
                record_id=record.id,
                detail=f"Event {record.event_id} not found",
            )

        verdict = self._evaluator.evaluate_for_event(event, record.check_in_timestamp)
        if not verdict.is_late:
            # On-time records are left untouched: an absent isLate means on time.
            logger.info(
                "checkin.on_time record_id=%s check_in=%s grace_end=%s",
                record.id,
                record.check_in_timestamp.isoformat(),
                verdict.grace_period_end_time.isoformat(),
            )
            return CheckInOutcome(status=CheckInStatus.ON_TIME, record_id=record.id, is_late=False)

        amount = event.late_deduction_amount
        logger.info(
            "checkin.late record_id=%s photographer_id=%s check_in=%s grace_end=%s amount=%s",
            record.id,
            record.photographer_id,
            record.check_in_timestamp.isoformat(),
            verdict.grace_period_end_time.isoformat(),
            amount,
        )

        if not self._attendance.stamp_lateness(record.id, is_late=True, late_deduction_applied=amount):
            logger.warning("checkin.record_not_found record_id=%s", record.id)
            return CheckInOutcome(
                status=CheckInStatus.RECORD_NOT_FOUND,
                record_id=record.id,
                is_late=True,
                detail=f"Attendance record {record.id} not found",
            )

        try:
            deduction = self._ledger.apply_deduction(record.photographer_id, amount, attendance_id=record.id)
        except NotFoundError as exc:
            # Record stays stamped with the nominal amount; reconciliation picks it up.
            logger.error("checkin.ledger_not_found record_id=%s reason=%s", record.id, exc)
            return CheckInOutcome(
                status=CheckInStatus.LEDGER_NOT_FOUND, record_id=record.id, is_late=True, detail=str(exc)
            )
        except TransientStoreError as exc:
            logger.error("checkin.deduction_failed record_id=%s reason=%s", record.id, exc)
            return CheckInOutcome(
                status=CheckInStatus.DEDUCTION_FAILED, record_id=record.id, is_late=True, detail=str(exc)
            )

        if not deduction.applied:
            if deduction.amount != amount:
                # The event amount changed since the first run; the record must show what was charged.
                self._attendance.stamp_lateness(record.id, is_late=True, late_deduction_applied=deduction.amount)
            logger.info("checkin.already_applied record_id=%s amount=%s", record.id, deduction.amount)
            return CheckInOutcome(
                status=CheckInStatus.ALREADY_APPLIED, record_id=record.id, is_late=True, deduction=deduction
            )

        self._notifier.notify_late_check_in(record.photographer_id, amount)
        return CheckInOutcome(status=CheckInStatus.LATE_DEDUCTED, record_id=record.id, is_late=True, deduction=deduction)
