from fastapi import APIRouter
from app.api.v1 import schedules, today_schedules, tickets, configuration

api_router = APIRouter()

api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
api_router.include_router(today_schedules.router, prefix="/today-schedules", tags=["today-schedules"])
api_router.include_router(tickets.router, prefix="/tickets", tags=["tickets"])
api_router.include_router(configuration.router, prefix="/configuration", tags=["configuration"])
