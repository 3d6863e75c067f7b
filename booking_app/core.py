# booking_app/core.py

import re
from typing import NamedTuple, Optional

from .errors import ValidationError

TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
# "9:00 - 17:00", "09:00–17:30", "Mon-Fri 8:30 — 18:00"
HOURS_RE = re.compile(r"(\d{1,2}:\d{2})\s*[-–—]\s*(\d{1,2}:\d{2})")


class OperatingHours(NamedTuple):
    open: str
    close: str


def normalize_time(value: str) -> str:
    """Return `value` as zero-padded 24h HH:MM, raising ValueError if it isn't a time of day."""
    match = TIME_RE.match(value.strip())
    if match is None:
        raise ValueError("Time must be in HH:MM format")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError("Time must be a valid time of day")
    return f"{hour:02d}:{minute:02d}"


def parse_operating_hours(text: Optional[str]) -> Optional[OperatingHours]:
    """
    Pull an open-close range out of a business's free-form operating hours.

    Returns None when no range is found; such a business accepts any time.
    """
    if not text:
        return None
    match = HOURS_RE.search(text)
    if match is None:
        return None
    try:
        return OperatingHours(normalize_time(match.group(1)), normalize_time(match.group(2)))
    except ValueError:
        return None


def validate_time(time: str, open: str, close: str) -> bool:
    # zero-padded HH:MM strings sort like the times they represent
    return open <= time <= close


def check_booking_time(time: str, operating_hours: Optional[str]):
    hours = parse_operating_hours(operating_hours)
    if hours is None:
        return
    if not validate_time(time, hours.open, hours.close):
        raise ValidationError.for_field(
            "time", f"Time must be within operating hours ({hours.open} - {hours.close})"
        )
