"""
Today's schedule derivation.

Projects recurring weekly schedules onto one calendar date. This is the
path used when the precomputed "today physician schedules" source has no
rows for the date, so it must stand on its own.

Dates are compared as plain calendar dates; the caller is expected to pass
the target date in the same local timezone the schedules were recorded in.
"""

from datetime import date
from typing import Iterable, List, Mapping, Optional

from app.core.utils import weekday_name
from app.schemas.doctor import NamedRef, Physician
from app.schemas.schedule import ClinicAssignment, TodayScheduleInstance, WeeklySchedule

UNKNOWN_PHYSICIAN = "Unknown Physician"
NOT_AVAILABLE = "N/A"


def is_effective_on(schedule: WeeklySchedule, target_date: date, day: Optional[str] = None) -> bool:
    if schedule.is_active is False:
        return False
    # Schedules with a future start date have not started yet
    if schedule.start_date and schedule.start_date > target_date:
        return False
    return (day or weekday_name(target_date)) in schedule.days


def _label(ref: Optional[NamedRef]) -> str:
    if ref is None:
        return NOT_AVAILABLE
    return ref.label or NOT_AVAILABLE


def resolve_for_date(
    target_date: date,
    schedules: Iterable[WeeklySchedule],
    physicians: Optional[Mapping[str, Physician]] = None,
    clinic_assignments: Optional[Mapping[str, ClinicAssignment]] = None,
) -> List[TodayScheduleInstance]:
    """
    Build the list of schedule instances effective on ``target_date``.

    A schedule survives when it is active, its start date is on or before the
    target date, and the target weekday is one of its days. Physician display
    fields are looked up in ``physicians`` (keyed by id); anything that cannot
    be resolved is filled with a placeholder instead of failing. An active
    clinic assignment keyed by schedule id is attached as-is.

    Input order is preserved and a new list is returned on every call.
    """
    physicians = physicians or {}
    clinic_assignments = clinic_assignments or {}
    day = weekday_name(target_date)

    instances = []
    for schedule in schedules:
        if not is_effective_on(schedule, target_date, day):
            continue

        physician = physicians.get(schedule.physician_id)
        assignment = clinic_assignments.get(schedule.id)
        if assignment is not None and not assignment.is_active:
            assignment = None

        instances.append(TodayScheduleInstance(
            source_schedule_id=schedule.id,
            physician_id=schedule.physician_id,
            physician_name=(physician.name if physician else None) or UNKNOWN_PHYSICIAN,
            speciality=_label(physician.speciality) if physician else NOT_AVAILABLE,
            degree=_label(physician.degree) if physician else NOT_AVAILABLE,
            clinic_time_from=schedule.start_time,
            clinic_time_to=schedule.end_time,
            day=day,
            date=target_date,
            clinic_assignment=assignment,
        ))

    return instances
