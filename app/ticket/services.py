# app/ticket/services.py
import logging
import threading
from datetime import date, datetime

from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.exceptions import OutsideServiceHours, TicketAlreadyResolved, TicketNotFound
from app.report.services import recompute_daily_stats
from app.ticket import store as ticket_store
from app.ticket.models import Ticket
from app.ticket.numbering import generate_ticket_number
from app.ticket.types import TICKET_TYPES, TicketType

logger = logging.getLogger(__name__)

# Sequence numbers are count-then-insert; issuance is serialized
_issue_lock = threading.Lock()


def is_within_service_hours(now: datetime, settings: Settings) -> bool:
    return settings.SERVICE_OPEN_HOUR <= now.hour < settings.SERVICE_CLOSE_HOUR


def next_sequence(db: Session, ticket_type: TicketType, day: date) -> int:
    return ticket_store.count_by_type_and_date(db, ticket_type, day) + 1


def issue_ticket(
    db: Session,
    ticket_type: TicketType,
    now: datetime,
    settings: Settings | None = None,
) -> Ticket:
    settings = settings or get_settings()
    if not is_within_service_hours(now, settings):
        raise OutsideServiceHours(settings.SERVICE_OPEN_HOUR, settings.SERVICE_CLOSE_HOUR)

    day = now.date()
    with _issue_lock:
        sequence = next_sequence(db, ticket_type, day)
        ticket = Ticket(
            ticket_number=generate_ticket_number(ticket_type, sequence, day),
            ticket_type=ticket_type,
            issue_date=day,
            issue_time=now.time().replace(microsecond=0),
            attended=False,
            abandoned=False,
        )
        ticket_store.insert_ticket(db, ticket)
        recompute_daily_stats(db, day)

    logger.info("Issued ticket %s", ticket.ticket_number)
    return ticket


def get_ticket(db: Session, ticket_id: int) -> Ticket:
    ticket = ticket_store.get_ticket(db, ticket_id)
    if ticket is None:
        raise TicketNotFound(ticket_id)
    return ticket


def get_ticket_by_number(db: Session, ticket_number: str) -> Ticket | None:
    return ticket_store.get_ticket_by_number(db, ticket_number)


def mark_as_abandoned(db: Session, ticket_id: int) -> Ticket:
    ticket = get_ticket(db, ticket_id)
    if not ticket.is_pending:
        raise TicketAlreadyResolved(ticket.ticket_number)

    ticket.abandoned = True
    ticket_store.update_ticket(db, ticket)
    recompute_daily_stats(db, ticket.issue_date)
    logger.info("Ticket %s abandoned", ticket.ticket_number)
    return ticket


def start_service(db: Session, ticket_id: int, counter_number: int, now: datetime) -> Ticket:
    ticket = get_ticket(db, ticket_id)
    if not ticket.is_waiting:
        raise TicketAlreadyResolved(ticket.ticket_number)

    ticket.counter_number = counter_number
    ticket.service_start = now.replace(microsecond=0)
    return ticket_store.update_ticket(db, ticket)


def service_minutes(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds() / 60)


def finish_service(db: Session, ticket_id: int, now: datetime) -> Ticket:
    ticket = get_ticket(db, ticket_id)
    if not ticket.is_pending:
        raise TicketAlreadyResolved(ticket.ticket_number)

    end = now.replace(microsecond=0)
    ticket.attended = True
    ticket.service_end = end
    if ticket.service_start is not None:
        ticket.service_duration = service_minutes(ticket.service_start, end)

    ticket_store.update_ticket(db, ticket)
    recompute_daily_stats(db, ticket.issue_date)
    return ticket


def get_pending_tickets(db: Session, day: date) -> list[Ticket]:
    return ticket_store.get_pending_by_date(db, day)


def get_pending_by_type(db: Session, day: date) -> dict[TicketType, list[Ticket]]:
    return {t: ticket_store.get_pending_by_type_and_date(db, day, t) for t in TicketType}


def get_pending_count(db: Session, day: date) -> dict[str, int]:
    pending = get_pending_tickets(db, day)
    counts = {t.value: sum(1 for p in pending if p.ticket_type == t) for t in TicketType}
    counts["total"] = len(pending)
    return counts


def get_tickets_by_date(db: Session, day: date) -> list[Ticket]:
    return ticket_store.get_tickets_by_date(db, day)


def get_recently_served(db: Session, limit: int) -> list[Ticket]:
    return ticket_store.get_recently_served(db, limit)


def release_ticket(db: Session, ticket_id: int) -> Ticket:
    """Return a ticket whose service was dropped to the waiting queue."""
    ticket = get_ticket(db, ticket_id)
    if not ticket.is_pending:
        raise TicketAlreadyResolved(ticket.ticket_number)

    ticket.counter_number = None
    ticket.service_start = None
    return ticket_store.update_ticket(db, ticket)


def queue_position(db: Session, ticket: Ticket) -> dict:
    """Place of a waiting ticket among its type and the expected wait.

    Position 1 is the next ticket of that type to be called; the wait is the
    position times the type's mean service time.
    """
    waiting = ticket_store.get_pending_by_type_and_date(db, ticket.issue_date, ticket.ticket_type)
    ids = [t.id for t in waiting]
    position = ids.index(ticket.id) + 1 if ticket.id in ids else 0
    mean = TICKET_TYPES[ticket.ticket_type].mean_service_minutes
    return {"position": position, "estimated_wait_minutes": position * mean}


def discard_pending_tickets(db: Session, day: date) -> int:
    """Abandon every ticket of the day that is neither attended nor abandoned."""
    unresolved = ticket_store.get_unresolved_by_date(db, day)
    for ticket in unresolved:
        mark_as_abandoned(db, ticket.id)
    logger.info("Discarded %d unresolved tickets for %s", len(unresolved), day)
    return len(unresolved)
