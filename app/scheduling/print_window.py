"""
Ticket print window.

Printing stays allowed until ``grace_minutes`` after the clinic end time.
Printing before the clinic ends is never blocked here. Missing or malformed
times permit printing.
"""

from datetime import datetime, time
from typing import Optional, Union

from app.core.logger import logger
from app.core.utils import parse_clock

DEFAULT_GRACE_MINUTES = 10


def _minutes_of(now: Union[datetime, time, str]) -> int:
    if isinstance(now, str):
        return parse_clock(now)
    return now.hour * 60 + now.minute


def is_printable(
    clinic_end_time: Optional[str],
    now: Union[datetime, time, str],
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
) -> bool:
    if not clinic_end_time:
        return True

    try:
        end_minutes = parse_clock(clinic_end_time)
    except ValueError:
        logger.warning(f"Cannot parse clinic end time {clinic_end_time!r}, allowing print")
        return True

    try:
        now_minutes = _minutes_of(now)
    except ValueError:
        logger.warning(f"Cannot parse current time {now!r}, allowing print")
        return True

    delta = now_minutes - end_minutes
    return delta <= grace_minutes
