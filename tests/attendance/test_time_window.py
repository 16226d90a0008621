from datetime import datetime, timedelta, timezone

import pytest

from src.checkin_penalty.checkin_penalty.attendance.time_window import TimeWindowEvaluator
from src.checkin_penalty.checkin_penalty.core.exceptions import ValidationError

T = datetime(2025, 6, 14, 18, 0, tzinfo=timezone.utc)


def _evaluate(check_in, *, offset=30, grace=10, event_at=T):
    return TimeWindowEvaluator().evaluate(
        event_date_time=event_at,
        required_arrival_time_offset_minutes=offset,
        grace_period_minutes=grace,
        check_in_time=check_in,
    )


def test_check_in_exactly_at_grace_end_is_not_late():
    verdict = _evaluate(T - timedelta(minutes=20))

    assert verdict.grace_period_end_time == T - timedelta(minutes=20)
    assert verdict.is_late is False


def test_one_millisecond_after_grace_end_is_late():
    verdict = _evaluate(T - timedelta(minutes=20) + timedelta(milliseconds=1))

    assert verdict.is_late is True


@pytest.mark.parametrize("offset,grace", [(0, 0), (15, 0), (0, 5), (120, 45)])
def test_boundary_is_exclusive_for_any_configuration(offset, grace):
    grace_end = T - timedelta(minutes=offset) + timedelta(minutes=grace)

    assert _evaluate(grace_end, offset=offset, grace=grace).is_late is False
    assert _evaluate(grace_end + timedelta(milliseconds=1), offset=offset, grace=grace).is_late is True


def test_required_arrival_is_event_time_minus_offset():
    verdict = _evaluate(T - timedelta(minutes=15))

    assert verdict.required_arrival_time == T - timedelta(minutes=30)
    assert verdict.is_late is True


def test_early_arrival_within_window_is_on_time():
    assert _evaluate(T - timedelta(minutes=25)).is_late is False


def test_missing_timing_settings_default_to_zero():
    verdict = _evaluate(T, offset=None, grace=None)

    assert verdict.grace_period_end_time == T
    assert verdict.is_late is False


def test_naive_and_aware_instants_compare_as_utc():
    naive_event = datetime(2025, 6, 14, 18, 0)

    verdict = _evaluate("2025-06-14T18:00:00.001Z", offset=0, grace=0, event_at=naive_event)

    assert verdict.is_late is True


def test_negative_grace_is_rejected():
    with pytest.raises(ValidationError):
        _evaluate(T, grace=-1)


def test_garbage_check_in_time_is_rejected():
    with pytest.raises(ValidationError):
        _evaluate("not a time")
