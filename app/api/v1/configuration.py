from fastapi import APIRouter, Depends

from app.api.deps import get_print_config
from app.schemas.configuration import PrintConfigResponse
from app.services.print_config import PrintConfigRefresher

router = APIRouter()

@router.get("/print", response_model=PrintConfigResponse)
async def read_print_config(print_config: PrintConfigRefresher = Depends(get_print_config)):
    return PrintConfigResponse(
        key=print_config.key,
        print_minutes_after_clinic_end=print_config.value,
        refresh_interval_seconds=int(print_config.interval_seconds)
    )

@router.post("/print/refresh", response_model=PrintConfigResponse)
async def refresh_print_config(print_config: PrintConfigRefresher = Depends(get_print_config)):
    await print_config.refresh()
    return await read_print_config(print_config)
