import calendar
from collections.abc import Iterable
from datetime import date
from typing import Any

from agenda.services.slot_resolver import field, find_rule, is_occupying
from agenda.services.time_utils import as_iso_date


def days_in_month(year: int, month: int) -> list[date]:
    _, last = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last + 1)]


def month_overview(
    year: int,
    month: int,
    weekly_rules: Iterable[Any] | None,
    blocked_intervals: Iterable[Any] | None = None,
    appointments: Iterable[Any] | None = None,
) -> dict[str, list[date]]:
    """Busy and closed days of a month for the provider calendar.

    busy_days: dates with a blocked interval or a non-canceled appointment.
    closed_days: dates whose weekday has no open rule.
    """
    days = days_in_month(year, month)
    rules = list(weekly_rules or ())
    in_month = {d.isoformat(): d for d in days}

    busy: set[date] = set()
    for rec in blocked_intervals or ():
        d = in_month.get(as_iso_date(field(rec, "date")))
        if d:
            busy.add(d)
    for rec in appointments or ():
        if not is_occupying(rec):
            continue
        d = in_month.get(as_iso_date(field(rec, "date")))
        if d:
            busy.add(d)

    closed = []
    for d in days:
        rule = find_rule(rules, d)
        if rule is None or not field(rule, "is_available", False):
            closed.append(d)

    return {"busy_days": sorted(busy), "closed_days": closed}
