# app/queue/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.clock import Clock, get_clock
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.queue.schemas import CallOut, CounterOut, EstimateOut, QueueStatusOut
from app.queue.service import QueueService, get_queue_service
from app.ticket.types import TicketType

router = APIRouter(prefix="/counters", tags=["Counters"])
queue_router = APIRouter(prefix="/queue", tags=["Queue"])


@router.get("/", response_model=list[CounterOut])
def list_all(queue: QueueService = Depends(get_queue_service)):
    return queue.all_counters()


@router.post("/reset", status_code=204)
def reset(db: Session = Depends(get_db), queue: QueueService = Depends(get_queue_service)):
    queue.reset_all(db)


@router.post("/{counter_number}", response_model=CounterOut)
def initialize(
    counter_number: int,
    db: Session = Depends(get_db),
    queue: QueueService = Depends(get_queue_service),
):
    # An attendant may not change seats in the middle of a service
    return queue.seat_counter(db, counter_number)


@router.get("/{counter_number}", response_model=CounterOut)
def get(counter_number: int, queue: QueueService = Depends(get_queue_service)):
    return queue.get_counter(counter_number)


@router.post("/{counter_number}/call", response_model=CallOut)
def call_next(
    counter_number: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    queue: QueueService = Depends(get_queue_service),
):
    ticket = queue.call_next(db, counter_number, clock())
    if ticket is None:
        return {"counter": counter_number, "ticket": None, "message": "No tickets waiting"}
    return {"counter": counter_number, "ticket": ticket, "message": f"Calling {ticket.ticket_number}"}


@router.post("/{counter_number}/finish", response_model=CallOut)
def finish(
    counter_number: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    queue: QueueService = Depends(get_queue_service),
):
    ticket = queue.finish_service(db, counter_number, clock())
    return {"counter": counter_number, "ticket": ticket, "message": f"Finished {ticket.ticket_number}"}


@queue_router.get("/status", response_model=QueueStatusOut)
def status(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
    queue: QueueService = Depends(get_queue_service),
):
    return queue.queue_stats(db, clock().date(), settings.RECENT_CALLS_LIMIT)


@queue_router.get("/estimate/{ticket_type}", response_model=EstimateOut)
def estimate(ticket_type: TicketType, queue: QueueService = Depends(get_queue_service)):
    return {"ticket_type": ticket_type, "minutes": queue.estimate_service_time(ticket_type)}
