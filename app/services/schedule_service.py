from datetime import date
from typing import Iterable, List

import httpx
from fastapi import HTTPException

from app.clients.backend import BackendClient
from app.core.logger import logger
from app.scheduling.overlap import find_overlapping
from app.scheduling.today import resolve_for_date
from app.schemas.schedule import (
    ScheduleCreate,
    ScheduleStats,
    ScheduleUpdate,
    TodayScheduleInstance,
    WeeklySchedule,
)

OVERLAP_MESSAGE = (
    "This physician already has a schedule with overlapping time on the same day(s). "
    "Please choose different days or times to avoid conflicts."
)

def schedule_stats(schedules: Iterable[WeeklySchedule]) -> ScheduleStats:
    schedules = list(schedules)
    active = sum(1 for s in schedules if s.is_active is not False)
    return ScheduleStats(total=len(schedules), active=active, inactive=len(schedules) - active)

def backend_unavailable(exc: httpx.HTTPError) -> HTTPException:
    logger.error(f"Schedule backend request failed: {exc}")
    return HTTPException(status_code=502, detail="Schedule backend unavailable")

class ScheduleService:
    def __init__(self, client: BackendClient):
        self.client = client

    async def create_schedule(self, schedule: ScheduleCreate) -> WeeklySchedule:
        try:
            # Check for time overlap on same days of the week
            existing = await self.client.list_schedules(physician_id=schedule.physician_id)
            conflicts = find_overlapping(schedule, existing)
            if conflicts:
                logger.info(
                    f"Rejected schedule for physician {schedule.physician_id}: "
                    f"overlaps {', '.join(c.id for c in conflicts)}"
                )
                raise HTTPException(status_code=400, detail=OVERLAP_MESSAGE)

            payload = schedule.model_dump(mode="json", by_alias=True, exclude_none=True)
            payload["physician"] = payload.pop("physicianId")
            return await self.client.create_schedule(payload)
        except httpx.HTTPError as exc:
            raise backend_unavailable(exc)

    async def update_schedule(self, schedule_id: str, schedule_update: ScheduleUpdate) -> WeeklySchedule:
        # Overlap is only enforced when a schedule is created, not on update
        try:
            schedule = await self.client.get_schedule(schedule_id)
            if not schedule:
                raise HTTPException(status_code=404, detail="Schedule not found")

            update_data = schedule_update.model_dump(mode="json", by_alias=True, exclude_unset=True)
            if "physicianId" in update_data:
                update_data["physician"] = update_data.pop("physicianId")
            return await self.client.update_schedule(schedule_id, update_data)
        except httpx.HTTPError as exc:
            raise backend_unavailable(exc)

    async def get_stats(self) -> ScheduleStats:
        try:
            schedules = await self.client.list_schedules()
        except httpx.HTTPError as exc:
            raise backend_unavailable(exc)
        return schedule_stats(schedules)

    async def derive_today_schedules(self, target_date: date) -> List[TodayScheduleInstance]:
        schedules = await self.client.list_schedules()
        physicians = await self.client.list_physicians()
        try:
            assignments = await self.client.list_clinic_assignments()
        except httpx.HTTPError as exc:
            # Clinic assignment is display metadata only
            logger.warning(f"Could not load clinic assignments: {exc}")
            assignments = {}
        return resolve_for_date(target_date, schedules, physicians, assignments)

    async def get_today_schedules(self, target_date: date) -> List[TodayScheduleInstance]:
        try:
            instances = await self.client.list_today_schedules(target_date)
            if instances:
                return instances

            # Fallback: derive today's schedules from the weekly schedules
            logger.info(f"No precomputed schedules for {target_date.isoformat()}, deriving from weekly schedules")
            return await self.derive_today_schedules(target_date)
        except httpx.HTTPError as exc:
            raise backend_unavailable(exc)
