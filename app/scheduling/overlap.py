"""
Overlap detection for weekly physician schedules.

Two schedules of the same physician conflict when they share a weekday and
their [start_time, end_time) intervals intersect. Back-to-back schedules
(one ends exactly when the other starts) do not conflict. Inactive
schedules never take part in the check.
"""

from typing import Iterable, List, Union

from app.core.utils import parse_time_to_minutes
from app.schemas.schedule import ScheduleCreate, WeeklySchedule

ScheduleLike = Union[ScheduleCreate, WeeklySchedule]


def _relevant(candidate: ScheduleLike, existing: Iterable[WeeklySchedule]) -> Iterable[WeeklySchedule]:
    return (
        schedule for schedule in existing
        if schedule.physician_id == candidate.physician_id and schedule.is_active is not False
    )


def _conflicts(candidate: ScheduleLike, new_start: int, new_end: int, schedule: WeeklySchedule) -> bool:
    if not set(candidate.days) & set(schedule.days):
        return False

    existing_start = parse_time_to_minutes(schedule.start_time)
    existing_end = parse_time_to_minutes(schedule.end_time)
    return not (new_end <= existing_start or new_start >= existing_end)


def find_overlapping(candidate: ScheduleLike, existing: Iterable[WeeklySchedule]) -> List[WeeklySchedule]:
    """
    Return every active schedule of the candidate's physician that conflicts
    with the candidate, in input order.
    """
    new_start = parse_time_to_minutes(candidate.start_time)
    new_end = parse_time_to_minutes(candidate.end_time)

    return [
        schedule for schedule in _relevant(candidate, existing)
        if _conflicts(candidate, new_start, new_end, schedule)
    ]


def has_overlap(candidate: ScheduleLike, existing: Iterable[WeeklySchedule]) -> bool:
    """
    True as soon as one active schedule of the same physician shares a
    weekday with the candidate and its time range intersects.
    """
    new_start = parse_time_to_minutes(candidate.start_time)
    new_end = parse_time_to_minutes(candidate.end_time)

    return any(
        _conflicts(candidate, new_start, new_end, schedule)
        for schedule in _relevant(candidate, existing)
    )
