"""Bookable time slots for one provider and one calendar date.

Pure computation over data already loaded from the stores: the weekly rule
for the date's weekday is cut into `interval_minutes` slots, then each slot is
closed when a blocked interval or a live appointment on the same date
overlaps it. All arithmetic runs on minute-of-day integers.
"""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any, Literal

from agenda.models.appointment import AppointmentStatus
from agenda.models.time_slot import TimeSlot
from agenda.services.time_utils import (
    as_iso_date,
    day_of_week,
    format_hhmm,
    intervals_overlap,
    parse_hhmm,
)

logger = logging.getLogger(__name__)

PartialSlotPolicy = Literal["drop", "clip", "keep"]

# Appointments in these states do not hold their time range.
NON_OCCUPYING_STATUSES = frozenset({AppointmentStatus.canceled.value})

_CAMEL = {
    "day_of_week": "dayOfWeek",
    "start_time": "startTime",
    "end_time": "endTime",
    "is_available": "isAvailable",
    "interval_minutes": "intervalMinutes",
}


def field(record: Any, name: str, default: Any = None) -> Any:
    """Read `name` from a model instance or from a JSON-style dict (snake or camel keys)."""
    if isinstance(record, dict):
        if name in record:
            return record[name]
        return record.get(_CAMEL.get(name, name), default)
    return getattr(record, name, default)


def _status_value(status: Any) -> str:
    if isinstance(status, AppointmentStatus):
        return status.value
    return str(status) if status else ""


def is_occupying(appointment: Any) -> bool:
    status = _status_value(field(appointment, "status"))
    return bool(status) and status not in NON_OCCUPYING_STATUSES


def find_rule(weekly_rules: Iterable[Any] | None, d: date) -> Any | None:
    dow = day_of_week(d)
    for rule in weekly_rules or ():
        if field(rule, "day_of_week") == dow:
            return rule
    return None


def _ranges_on(records: Iterable[Any] | None, iso_day: str) -> list[tuple[int, int, Any]]:
    """(start, end, record) for records dated `iso_day`. Raises ValueError on a bad time."""
    out: list[tuple[int, int, Any]] = []
    for rec in records or ():
        if as_iso_date(field(rec, "date")) != iso_day:
            continue
        out.append((parse_hhmm(field(rec, "start_time")), parse_hhmm(field(rec, "end_time")), rec))
    return out


def generate_slot_bounds(
    start: int, end: int, interval: int, partial_slot: PartialSlotPolicy = "drop"
) -> list[tuple[int, int]]:
    """Cut [start, end) into consecutive `interval`-minute ranges."""
    bounds: list[tuple[int, int]] = []
    if interval <= 0 or start >= end:
        return bounds
    current = start
    while current < end:
        slot_end = current + interval
        if slot_end > end:
            if partial_slot == "drop":
                break
            if partial_slot == "clip":
                slot_end = end
        bounds.append((current, slot_end))
        current = slot_end
    return bounds


def resolve_time_slots(
    d: date,
    weekly_rules: Iterable[Any] | None,
    blocked_intervals: Iterable[Any] | None = None,
    appointments: Iterable[Any] | None = None,
    partial_slot: PartialSlotPolicy = "drop",
) -> list[TimeSlot]:
    """Return the ordered time slots of `d`.

    Collections that are not loaded yet may be passed as None and count as
    empty. A closed weekday yields []. Malformed times on the rule or on any
    record dated `d` close the whole day instead of raising.
    """
    rule = find_rule(weekly_rules, d)
    if rule is None or not field(rule, "is_available", False):
        return []

    iso_day = as_iso_date(d)
    try:
        start = parse_hhmm(field(rule, "start_time"))
        end = parse_hhmm(field(rule, "end_time"))
        interval = int(field(rule, "interval_minutes") or 0)
        blocks = _ranges_on(blocked_intervals, iso_day)
        booked = [r for r in _ranges_on(appointments, iso_day) if is_occupying(r[2])]
    except (TypeError, ValueError) as e:
        logger.warning("Closing %s: malformed schedule data (%s)", iso_day, e)
        return []

    if start >= end or interval <= 0:
        logger.warning(
            "Closing %s: invalid weekly rule %s-%s every %s min",
            iso_day,
            field(rule, "start_time"),
            field(rule, "end_time"),
            interval,
        )
        return []

    slots: list[TimeSlot] = []
    for slot_start, slot_end in generate_slot_bounds(start, end, interval, partial_slot):
        is_blocked = any(intervals_overlap(slot_start, slot_end, b0, b1) for b0, b1, _ in blocks)
        status = None
        if not is_blocked:
            for a0, a1, appt in booked:
                if intervals_overlap(slot_start, slot_end, a0, a1):
                    status = _status_value(field(appt, "status"))
                    break
        slots.append(
            TimeSlot(
                start_time=format_hhmm(slot_start),
                end_time=format_hhmm(slot_end),
                is_available=not is_blocked and status is None,
                status=status,
            )
        )
    return slots


def range_is_free(
    d: date,
    start_time: str,
    end_time: str,
    weekly_rules: Iterable[Any] | None,
    blocked_intervals: Iterable[Any] | None = None,
    appointments: Iterable[Any] | None = None,
) -> bool:
    """True if [start_time, end_time) on `d` lies inside open hours and hits no block or live appointment."""
    rule = find_rule(weekly_rules, d)
    if rule is None or not field(rule, "is_available", False):
        return False
    iso_day = as_iso_date(d)
    try:
        start = parse_hhmm(start_time)
        end = parse_hhmm(end_time)
        open_start = parse_hhmm(field(rule, "start_time"))
        open_end = parse_hhmm(field(rule, "end_time"))
        blocks = _ranges_on(blocked_intervals, iso_day)
        booked = [r for r in _ranges_on(appointments, iso_day) if is_occupying(r[2])]
    except (TypeError, ValueError) as e:
        logger.warning("Rejecting range on %s: malformed schedule data (%s)", iso_day, e)
        return False
    if start >= end or start < open_start or end > open_end:
        return False
    if any(intervals_overlap(start, end, b0, b1) for b0, b1, _ in blocks):
        return False
    return not any(intervals_overlap(start, end, a0, a1) for a0, a1, _ in booked)
