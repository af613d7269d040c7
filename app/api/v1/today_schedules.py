from datetime import date as date_type, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_schedule_service
from app.schemas.schedule import TodayScheduleInstance
from app.services.schedule_service import ScheduleService

router = APIRouter()

@router.get("/", response_model=List[TodayScheduleInstance], response_model_by_alias=False)
async def read_today_schedules(
    date: Optional[str] = None, # YYYY-MM-DD, defaults to today
    service: ScheduleService = Depends(get_schedule_service)
):
    if date:
        try:
            target_date = datetime.strptime(date, "%Y-%m-%d").date()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
    else:
        target_date = date_type.today()

    return await service.get_today_schedules(target_date)
