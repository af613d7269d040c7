from fastapi import APIRouter, Depends

from app.api.deps import get_schedule_service
from app.scheduling.overlap import find_overlapping
from app.schemas.schedule import (
    OverlapCheckRequest,
    OverlapCheckResponse,
    ScheduleCreate,
    ScheduleStats,
    ScheduleUpdate,
    WeeklySchedule,
)
from app.services.schedule_service import ScheduleService

router = APIRouter()

@router.post("/", response_model=WeeklySchedule, response_model_by_alias=False, status_code=201)
async def create_schedule(
    schedule: ScheduleCreate,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.create_schedule(schedule)

@router.post("/check-overlap", response_model=OverlapCheckResponse)
async def check_overlap(request: OverlapCheckRequest):
    conflicts = find_overlapping(request.candidate, request.existing)
    return OverlapCheckResponse(
        has_overlap=bool(conflicts),
        conflicts=[schedule.id for schedule in conflicts]
    )

@router.get("/stats", response_model=ScheduleStats)
async def read_stats(service: ScheduleService = Depends(get_schedule_service)):
    return await service.get_stats()

@router.put("/{schedule_id}", response_model=WeeklySchedule, response_model_by_alias=False)
async def update_schedule(
    schedule_id: str,
    schedule_update: ScheduleUpdate,
    service: ScheduleService = Depends(get_schedule_service)
):
    return await service.update_schedule(schedule_id, schedule_update)
