# app/ticket/routes.py
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.clock import Clock, get_clock
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.queue.service import QueueService, get_queue_service
from app.ticket import services as ticket_service
from app.ticket.schemas import (
    DiscardOut,
    IssuedTicketOut,
    PendingCount,
    QueuePositionOut,
    TicketCreate,
    TicketOut,
)

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.post("/", response_model=IssuedTicketOut, status_code=201)
def issue(
    payload: TicketCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
):
    ticket = ticket_service.issue_ticket(db, payload.ticket_type, clock(), settings)
    return {**TicketOut.model_validate(ticket).model_dump(), **ticket_service.queue_position(db, ticket)}


@router.get("/", response_model=list[TicketOut])
def list_by_date(
    day: date | None = Query(default=None, alias="date", description="Issue date, defaults to today"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return ticket_service.get_tickets_by_date(db, day or clock().date())


@router.get("/pending", response_model=PendingCount)
def pending(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return ticket_service.get_pending_count(db, clock().date())


@router.get("/recent", response_model=list[TicketOut])
def recent(
    limit: int | None = Query(default=None, ge=1, le=50),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return ticket_service.get_recently_served(db, limit or settings.RECENT_CALLS_LIMIT)


@router.post("/discard", response_model=DiscardOut)
def discard(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    queue: QueueService = Depends(get_queue_service),
):
    today = clock().date()
    return {"date": today, "discarded": queue.discard_pending(db, today)}


@router.get("/{ticket_number}", response_model=TicketOut)
def get(ticket_number: str, db: Session = Depends(get_db)):
    ticket = ticket_service.get_ticket_by_number(db, ticket_number)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


@router.get("/{ticket_number}/position", response_model=QueuePositionOut)
def position(ticket_number: str, db: Session = Depends(get_db)):
    ticket = ticket_service.get_ticket_by_number(db, ticket_number)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return {"ticket_number": ticket.ticket_number, **ticket_service.queue_position(db, ticket)}
