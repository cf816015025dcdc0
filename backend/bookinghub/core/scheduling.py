# bookinghub/core/scheduling.py
"""
Date/time rules shared by every room-booking backend.

Dates travel as "YYYY-MM-DD" and times as "HH:MM". Both are zero-padded and
fixed width, so plain string comparison orders them correctly; the overlap
checks below rely on that.
"""
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping

from bookinghub.core.errors import InvalidTimeSpanError

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# fields that decide where and when a booking sits
SLOT_FIELDS = ("room_id", "start_date", "end_date", "start_time", "end_time")


def parse_date(value: str) -> date:
    if len(value) != 10:
        raise ValueError(f"date must be YYYY-MM-DD, got {value!r}")
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_time(value: str) -> time:
    if len(value) != 5:
        raise ValueError(f"time must be HH:MM, got {value!r}")
    return datetime.strptime(value, TIME_FORMAT).time()


def span_seconds(start_date: str, start_time: str, end_date: str, end_time: str) -> int:
    start = datetime.combine(parse_date(start_date), parse_time(start_time))
    end = datetime.combine(parse_date(end_date), parse_time(end_time))
    return int((end - start).total_seconds())


def span_hours(start_date: str, start_time: str, end_date: str, end_time: str) -> float:
    return span_seconds(start_date, start_time, end_date, end_time) / 3600


def ensure_positive_span(start_date: str, start_time: str, end_date: str, end_time: str) -> None:
    if span_seconds(start_date, start_time, end_date, end_time) <= 0:
        raise InvalidTimeSpanError()


def compute_total_amount(
    start_date: str, start_time: str, end_date: str, end_time: str, hourly_rate: int
) -> int:
    """
    ceil(hours * hourly_rate) in cents.

    Worked in whole seconds so 20 minutes at 3000/h is exactly 1000,
    not 1000.0000000001 rounded up to 1001.
    """
    seconds = span_seconds(start_date, start_time, end_date, end_time)
    return -(-seconds * hourly_rate // 3600)


def ranges_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    # inclusive on both ends: a range ending where the other starts overlaps
    return start_a <= end_b and end_a >= start_b


def slots_conflict(existing: Any, start_date: str, end_date: str, start_time: str, end_time: str) -> bool:
    """Both the date ranges and the time-of-day ranges must overlap."""
    return ranges_overlap(existing.start_date, existing.end_date, start_date, end_date) and ranges_overlap(
        existing.start_time, existing.end_time, start_time, end_time
    )


def slot_changed(current: Any, changes: Mapping[str, Any]) -> bool:
    return any(
        field in changes and changes[field] != getattr(current, field)
        for field in SLOT_FIELDS
    )


def needs_availability_check(current: Any, changes: Mapping[str, Any]) -> bool:
    """
    An edit only has to be re-checked when the booking ends up confirmed and
    either moved or was re-confirmed.
    """
    new_status = changes.get("status", current.status)
    if new_status != "confirmed":
        return False
    return slot_changed(current, changes) or current.status != "confirmed"


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
