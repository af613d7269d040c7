from datetime import date
from typing import Optional

from app.core.logger import logger

# Sunday-first, matches the weekday names stored on schedules
DAY_NAMES = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

def weekday_name(value: date) -> str:
    # Convert Python weekday (0=Mon, 6=Sun) to Sunday-first index
    python_day = value.weekday()
    index = 0 if python_day == 6 else python_day + 1
    return DAY_NAMES[index]

def parse_clock(value: str) -> int:
    """
    Parse "HH:MM" or "H:MM AM/PM" into minutes since midnight.

    Raises ValueError on anything else.
    """
    text = value.strip()
    period = None
    if text[-2:].upper() in ("AM", "PM"):
        period = text[-2:].upper()
        text = text[:-2].strip()

    parts = text.split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])

    if period:
        if not 1 <= hours <= 12:
            raise ValueError(f"Invalid hour in 12-hour time: {value!r}")
        if period == "AM" and hours == 12:
            hours = 0
        elif period == "PM" and hours != 12:
            hours += 12

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Time out of range: {value!r}")
    return hours * 60 + minutes

def parse_time_to_minutes(value: Optional[str]) -> int:
    """Lenient parse_clock: malformed input yields 0 and a warning."""
    if not value:
        return 0
    try:
        return parse_clock(value)
    except ValueError:
        logger.warning(f"Invalid time format: {value!r}, treating as 00:00")
        return 0

def format_time_12_hour(value: Optional[str]) -> str:
    if not value:
        return ""
    if "AM" in value.upper() or "PM" in value.upper():
        return value

    try:
        hours_str, minutes_str = value.split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except ValueError:
        return value

    period = "AM"
    hour_12 = hours
    if hours == 0:
        hour_12 = 12
    elif hours == 12:
        period = "PM"
    elif hours > 12:
        hour_12 = hours - 12
        period = "PM"
    return f"{hour_12}:{minutes:02d} {period}"
