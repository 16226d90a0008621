from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import to_utc_instant
from ..common.validators import require_non_empty, require_non_negative_amount
from ..core.enums import AttendanceType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in or check-out by a photographer.

    ``is_late`` stays ``None`` until the record is processed as late; absent
    means on time.
    """

    id: str
    event_id: str
    photographer_id: str
    type: AttendanceType
    check_in_timestamp: datetime
    is_late: Optional[bool] = None
    late_deduction_applied: Decimal = Decimal("0")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, record_id: Optional[str] = None) -> "AttendanceRecord":
        """Build a record from the trigger document (camelCase keys).

        Raises ``ValidationError`` when a required field is missing or malformed.
        """

        try:
            kind = AttendanceType(payload.get("type"))
        except ValueError:
            raise ValidationError(f"Unknown attendance type: {payload.get('type')!r}")

        timestamp = payload.get("checkInTimestamp")
        if timestamp is None or timestamp == "":
            raise ValidationError("checkInTimestamp is required")

        return cls(
            id=require_non_empty(record_id or payload.get("id"), "id"),
            event_id=require_non_empty(payload.get("eventId"), "eventId"),
            photographer_id=require_non_empty(payload.get("photographerId"), "photographerId"),
            type=kind,
            check_in_timestamp=to_utc_instant(timestamp, "checkInTimestamp"),
            is_late=None if payload.get("isLate") is None else bool(payload.get("isLate")),
            late_deduction_applied=require_non_negative_amount(
                payload.get("lateDeductionApplied"), "lateDeductionApplied", default=Decimal("0")
            ),
        )
