from fastapi import Depends, Request

from app.clients.backend import BackendClient
from app.services.print_config import PrintConfigRefresher
from app.services.schedule_service import ScheduleService
from app.services.ticket_service import TicketService

def get_backend_client(request: Request) -> BackendClient:
    return request.app.state.backend_client

def get_print_config(request: Request) -> PrintConfigRefresher:
    return request.app.state.print_config

async def get_schedule_service(client: BackendClient = Depends(get_backend_client)) -> ScheduleService:
    return ScheduleService(client)

async def get_ticket_service(print_config: PrintConfigRefresher = Depends(get_print_config)) -> TicketService:
    return TicketService(print_config)
