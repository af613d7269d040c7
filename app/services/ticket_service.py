from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from app.core.logger import logger
from app.core.utils import format_time_12_hour, parse_clock
from app.scheduling.print_window import is_printable
from app.schemas.ticket import PrintCheckResponse, TicketType
from app.services.print_config import PrintConfigRefresher

TICKET_PREFIXES = {
    TicketType.EXAMINATION: "E",
    TicketType.CONSULTATION: "C",
    TicketType.PROCEDURE: "P",
    TicketType.LATE: "L",
}

def format_ticket_number(sequence_number: int, ticket_type: str) -> str:
    try:
        prefix = TICKET_PREFIXES[TicketType(ticket_type)]
    except ValueError:
        prefix = "T"
    return f"{prefix}{sequence_number:03d}"

class TicketService:
    def __init__(self, print_config: PrintConfigRefresher):
        self.print_config = print_config

    def check_printable(self, clinic_time_to: Optional[str], current_time: Optional[str] = None) -> PrintCheckResponse:
        if current_time:
            try:
                parse_clock(current_time)
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid current_time. Use HH:MM")
        else:
            current_time = datetime.now().strftime("%H:%M")

        grace_minutes = self.print_config.value
        printable = is_printable(clinic_time_to, current_time, grace_minutes)

        message = None
        if not printable:
            message = (
                f"Ticket printing is not allowed more than {grace_minutes} minutes after clinic end time. "
                f"Clinic End Time: {format_time_12_hour(clinic_time_to)}, "
                f"Current Time: {format_time_12_hour(current_time)}"
            )
            logger.info(f"Blocked ticket print: clinic ended {clinic_time_to}, now {current_time}")

        return PrintCheckResponse(
            printable=printable,
            clinic_end_time=clinic_time_to,
            current_time=current_time,
            grace_minutes=grace_minutes,
            message=message,
        )
