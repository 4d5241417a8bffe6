import re
from datetime import date

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(value: str) -> int:
    """Parse a wall-clock "HH:MM" string into minutes since midnight.

    "24:00" is accepted as the end of the day. Raises ValueError otherwise.
    """
    if not isinstance(value, str):
        raise ValueError(f"Time must be a string, got {type(value).__name__}")
    m = _HHMM.match(value.strip())
    if not m:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        raise ValueError(f"Invalid time {value!r}, out of range")
    return hours * 60 + minutes


def format_hhmm(minutes: int) -> str:
    # No wrap past midnight: a slot kept past 23:59 reads as "24:15".
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open overlap of [a_start, a_end) and [b_start, b_end)."""
    return a_start < b_end and b_start < a_end


def day_of_week(d: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return d.isoweekday() % 7


def as_iso_date(value: date | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()[:10]
    return str(value).strip()[:10]
