from fastapi import APIRouter, Depends, Query

from app.api.deps import get_ticket_service
from app.schemas.ticket import PrintCheckRequest, PrintCheckResponse, TicketNumberResponse
from app.services.ticket_service import TicketService, format_ticket_number

router = APIRouter()

@router.post("/print-check", response_model=PrintCheckResponse)
async def print_check(
    request: PrintCheckRequest,
    service: TicketService = Depends(get_ticket_service)
):
    return service.check_printable(request.clinic_time_to, request.current_time)

@router.get("/number", response_model=TicketNumberResponse)
async def ticket_number(sequence: int = Query(..., ge=1), ticket_type: str = "Consultation"):
    return TicketNumberResponse(
        sequence_number=sequence,
        ticket_type=ticket_type,
        ticket_number=format_ticket_number(sequence, ticket_type)
    )
