from types import SimpleNamespace

import pytest

from bookinghub.core.errors import InvalidTimeSpanError
from bookinghub.core.scheduling import (
    compute_total_amount,
    ensure_positive_span,
    needs_availability_check,
    parse_date,
    parse_time,
    ranges_overlap,
    round_half_up,
    slot_changed,
    slots_conflict,
    span_hours,
)


def _booking(**kw):
    base = dict(
        room_id=1,
        start_date="2025-03-10",
        end_date="2025-03-10",
        start_time="09:00",
        end_time="10:00",
        status="confirmed",
    )
    base.update(kw)
    return SimpleNamespace(**base)


def test_two_hours_at_5000_costs_10000():
    assert compute_total_amount("2025-03-10", "09:00", "2025-03-10", "11:00", 5000) == 10000


def test_total_amount_rounds_up_partial_cents():
    # 10 minutes at 100/h = 16.67
    assert compute_total_amount("2025-03-10", "09:00", "2025-03-10", "09:10", 100) == 17
    # exact thirds must not pick up float noise
    assert compute_total_amount("2025-03-10", "09:00", "2025-03-10", "09:20", 3000) == 1000


def test_span_crosses_midnight_and_days():
    assert span_hours("2025-03-10", "22:00", "2025-03-11", "02:00") == 4
    assert compute_total_amount("2025-03-10", "09:00", "2025-03-12", "09:00", 100) == 4800


def test_ensure_positive_span_rejects_empty_and_negative_spans():
    with pytest.raises(InvalidTimeSpanError):
        ensure_positive_span("2025-03-10", "09:00", "2025-03-10", "09:00")
    with pytest.raises(InvalidTimeSpanError):
        ensure_positive_span("2025-03-11", "09:00", "2025-03-10", "10:00")
    ensure_positive_span("2025-03-10", "09:00", "2025-03-10", "09:01")


@pytest.mark.parametrize("value", ["2025-3-10", "2025-13-01", "10/03/2025", ""])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_date(value)


@pytest.mark.parametrize("value", ["9:00", "24:00", "09:60", "0900"])
def test_parse_time_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_time(value)


def test_ranges_overlap_is_inclusive():
    assert ranges_overlap("09:00", "10:00", "10:00", "11:00")
    assert ranges_overlap("09:00", "12:00", "10:00", "11:00")
    assert not ranges_overlap("09:00", "10:00", "10:01", "11:00")


def test_slots_conflict_needs_both_dates_and_times_to_overlap():
    existing = _booking()
    assert slots_conflict(existing, "2025-03-10", "2025-03-10", "09:30", "10:30")
    # same times, other day
    assert not slots_conflict(existing, "2025-03-11", "2025-03-11", "09:00", "10:00")
    # same day, later times
    assert not slots_conflict(existing, "2025-03-10", "2025-03-10", "10:30", "11:00")


def test_slot_changed_ignores_unchanged_values():
    current = _booking()
    assert not slot_changed(current, {"start_time": "09:00", "title": "x"})
    assert slot_changed(current, {"room_id": 2})


def test_needs_availability_check():
    confirmed = _booking()
    cancelled = _booking(status="cancelled")

    assert not needs_availability_check(confirmed, {"title": "renamed"})
    assert needs_availability_check(confirmed, {"end_time": "11:00"})
    assert not needs_availability_check(confirmed, {"end_time": "11:00", "status": "cancelled"})
    assert needs_availability_check(cancelled, {"status": "confirmed"})
    assert not needs_availability_check(cancelled, {"start_time": "08:00"})


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(33.35, 1) == 33.4
