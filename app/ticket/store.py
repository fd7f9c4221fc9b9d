# app/ticket/store.py
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.ticket.models import Ticket
from app.ticket.types import TicketType


def insert_ticket(db: Session, ticket: Ticket) -> int:
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    return ticket.id


def get_ticket(db: Session, ticket_id: int) -> Ticket | None:
    return db.query(Ticket).filter(Ticket.id == ticket_id).first()


def get_ticket_by_number(db: Session, ticket_number: str) -> Ticket | None:
    return db.query(Ticket).filter(Ticket.ticket_number == ticket_number).first()


def update_ticket(db: Session, ticket: Ticket) -> Ticket:
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    return ticket


def _waiting(db: Session, day: date):
    return db.query(Ticket).filter(
        Ticket.issue_date == day,
        Ticket.attended.is_(False),
        Ticket.abandoned.is_(False),
        Ticket.counter_number.is_(None),
    )


def get_pending_by_date(db: Session, day: date) -> list[Ticket]:
    """Waiting tickets of a day, oldest first."""
    return _waiting(db, day).order_by(Ticket.id.asc()).all()


def get_pending_by_type_and_date(db: Session, day: date, ticket_type: TicketType) -> list[Ticket]:
    """Waiting tickets of one type, in issue (FIFO) order."""
    return (
        _waiting(db, day)
        .filter(Ticket.ticket_type == ticket_type)
        .order_by(Ticket.id.asc())
        .all()
    )


def get_unresolved_by_date(db: Session, day: date) -> list[Ticket]:
    """Waiting and in-service tickets of a day, oldest first."""
    return (
        db.query(Ticket)
        .filter(
            Ticket.issue_date == day,
            Ticket.attended.is_(False),
            Ticket.abandoned.is_(False),
        )
        .order_by(Ticket.id.asc())
        .all()
    )


def count_by_type_and_date(db: Session, ticket_type: TicketType, day: date) -> int:
    return (
        db.query(func.count(Ticket.id))
        .filter(Ticket.ticket_type == ticket_type, Ticket.issue_date == day)
        .scalar()
        or 0
    )


def get_recently_served(db: Session, limit: int = 5) -> list[Ticket]:
    return (
        db.query(Ticket)
        .filter(Ticket.service_start.isnot(None))
        .order_by(Ticket.service_start.desc(), Ticket.id.desc())
        .limit(limit)
        .all()
    )


def get_tickets_by_date(db: Session, day: date) -> list[Ticket]:
    return db.query(Ticket).filter(Ticket.issue_date == day).order_by(Ticket.id.asc()).all()
