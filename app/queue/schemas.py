# app/queue/schemas.py
from datetime import datetime
from pydantic import BaseModel

from app.ticket.schemas import PendingCount, TicketOut
from app.ticket.types import TicketType


class CounterOut(BaseModel):
    number: int
    busy: bool
    current_ticket_id: int | None = None
    current_ticket_number: str | None = None
    service_start: datetime | None = None
    last_called_type: TicketType | None = None

    model_config = {"from_attributes": True}


class CallOut(BaseModel):
    counter: int
    ticket: TicketOut | None = None
    message: str


class QueueStatusOut(BaseModel):
    pending: PendingCount
    last_called: list[TicketOut]
    active_counters: int
    busy_counters: int
    last_global_type: TicketType | None = None


class EstimateOut(BaseModel):
    ticket_type: TicketType
    minutes: float
