# app/report/services.py
import calendar
import csv
import io
import logging
import threading
from datetime import date

from sqlalchemy.orm import Session

from app.report.models import DailyStats
from app.ticket import store as ticket_store
from app.ticket.models import Ticket
from app.ticket.types import TicketType

logger = logging.getLogger(__name__)

_stats_lock = threading.Lock()

CSV_HEADERS = [
    "ticket_number",
    "ticket_type",
    "issue_date",
    "issue_time",
    "counter_number",
    "service_start",
    "service_end",
    "attended",
    "abandoned",
]


def _average(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _rate(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count / total * 100


def _durations(tickets: list[Ticket]) -> list[float]:
    return [t.service_duration for t in tickets if t.attended and t.service_duration is not None]


def compute_daily_stats(day: date, tickets: list[Ticket]) -> dict:
    """Aggregate one day's tickets. Pure function of the ticket set."""
    stats = {
        "date": day,
        "total_issued": len(tickets),
        "total_attended": sum(1 for t in tickets if t.attended),
        "avg_service_time": _average(_durations(tickets)),
    }
    for ticket_type in TicketType:
        of_type = [t for t in tickets if t.ticket_type == ticket_type]
        prefix = ticket_type.value.lower()
        stats[f"{prefix}_issued"] = len(of_type)
        stats[f"{prefix}_attended"] = sum(1 for t in of_type if t.attended)
    return stats


def recompute_daily_stats(db: Session, day: date) -> DailyStats:
    # Read-then-insert on a unique date; one writer at a time
    with _stats_lock:
        values = compute_daily_stats(day, ticket_store.get_tickets_by_date(db, day))
        row = db.query(DailyStats).filter(DailyStats.date == day).first()
        if row is None:
            row = DailyStats(**values)
            db.add(row)
        else:
            for field, value in values.items():
                setattr(row, field, value)
        db.commit()
    db.refresh(row)
    return row


def get_daily_stats(db: Session, day: date) -> DailyStats | None:
    return db.query(DailyStats).filter(DailyStats.date == day).first()


def get_monthly_stats(db: Session, year: int, month: int) -> list[DailyStats]:
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    return (
        db.query(DailyStats)
        .filter(DailyStats.date >= first, DailyStats.date <= last)
        .order_by(DailyStats.date.asc())
        .all()
    )


def daily_report(db: Session, day: date) -> dict:
    stats = recompute_daily_stats(db, day)
    return {"stats": stats, "tickets": ticket_store.get_tickets_by_date(db, day)}


def monthly_report(db: Session, year: int, month: int) -> dict:
    daily = get_monthly_stats(db, year, month)
    summary = {
        field: sum(getattr(day, field) for day in daily)
        for field in (
            "total_issued",
            "total_attended",
            "sp_issued",
            "sp_attended",
            "sg_issued",
            "sg_attended",
            "se_issued",
            "se_attended",
        )
    }
    # Mean of the days that had at least one timed service
    summary["avg_service_time"] = _average(
        [day.avg_service_time for day in daily if day.avg_service_time > 0]
    )
    tickets: list[Ticket] = []
    for day in daily:
        tickets.extend(ticket_store.get_tickets_by_date(db, day.date))
    return {"summary": summary, "daily_stats": daily, "tickets": tickets}


def service_time_report(db: Session, day: date) -> dict:
    tickets = ticket_store.get_tickets_by_date(db, day)
    return {
        "date": day,
        "overall": _average(_durations(tickets)),
        "by_type": {
            ticket_type.value: _average(_durations([t for t in tickets if t.ticket_type == ticket_type]))
            for ticket_type in TicketType
        },
    }


def abandonment_report(db: Session, day: date) -> dict:
    tickets = ticket_store.get_tickets_by_date(db, day)

    def breakdown(subset: list[Ticket]) -> dict:
        abandoned = sum(1 for t in subset if t.abandoned)
        return {"total": len(subset), "abandoned": abandoned, "rate": _rate(abandoned, len(subset))}

    report = {"date": day, **breakdown(tickets)}
    report["by_type"] = {
        ticket_type.value: breakdown([t for t in tickets if t.ticket_type == ticket_type])
        for ticket_type in TicketType
    }
    return report


def export_tickets_csv(tickets: list[Ticket]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for t in tickets:
        writer.writerow(
            [
                t.ticket_number,
                t.ticket_type.value,
                t.issue_date.isoformat(),
                t.issue_time.strftime("%H:%M:%S"),
                t.counter_number if t.counter_number is not None else "",
                t.service_start.strftime("%H:%M:%S") if t.service_start else "",
                t.service_end.strftime("%H:%M:%S") if t.service_end else "",
                "yes" if t.attended else "no",
                "yes" if t.abandoned else "no",
            ]
        )
    logger.debug("Exported %d tickets to CSV", len(tickets))
    return buffer.getvalue()
