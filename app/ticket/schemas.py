# app/ticket/schemas.py
from datetime import date, datetime, time
from pydantic import BaseModel, Field

from app.ticket.types import TicketType


class TicketCreate(BaseModel):
    ticket_type: TicketType


class TicketOut(BaseModel):
    id: int
    ticket_number: str
    ticket_type: TicketType
    issue_date: date
    issue_time: time
    attended: bool
    abandoned: bool
    counter_number: int | None = None
    service_start: datetime | None = None
    service_end: datetime | None = None
    service_duration: int | None = None

    model_config = {"from_attributes": True}


class PendingCount(BaseModel):
    SP: int = Field(0, ge=0)
    SG: int = Field(0, ge=0)
    SE: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class DiscardOut(BaseModel):
    date: date
    discarded: int


class IssuedTicketOut(TicketOut):
    position: int
    estimated_wait_minutes: float


class QueuePositionOut(BaseModel):
    ticket_number: str
    position: int
    estimated_wait_minutes: float
