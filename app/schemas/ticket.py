from pydantic import BaseModel
from typing import Optional
from enum import Enum

class TicketType(str, Enum):
    EXAMINATION = "Examination"
    CONSULTATION = "Consultation"
    PROCEDURE = "Procedure"
    LATE = "Late"

class PrintCheckRequest(BaseModel):
    clinic_time_to: Optional[str] = None
    # HH:MM; server wall clock when omitted
    current_time: Optional[str] = None

class PrintCheckResponse(BaseModel):
    printable: bool
    clinic_end_time: Optional[str] = None
    current_time: str
    grace_minutes: int
    message: Optional[str] = None

class TicketNumberResponse(BaseModel):
    sequence_number: int
    ticket_type: str
    ticket_number: str
