# app/ticket/numbering.py
import re
from dataclasses import dataclass
from datetime import date

from app.ticket.types import TicketType

# YYMMDD-TTSS, e.g. 251019-SP03
TICKET_NUMBER_RE = re.compile(r"^(\d{2})(\d{2})(\d{2})-(SP|SG|SE)(\d{2})$")


@dataclass(frozen=True)
class ParsedTicketNumber:
    issue_date: date
    ticket_type: TicketType
    sequence: int


def generate_ticket_number(ticket_type: TicketType, sequence: int, day: date) -> str:
    """Build the ``YYMMDD-TTSS`` ticket number.

    Sequences above 99 per type per day are not supported; they produce a
    longer number instead of wrapping.
    """
    return f"{day:%y%m%d}-{TicketType(ticket_type).value}{sequence:02d}"


def parse_ticket_number(ticket_number: str) -> ParsedTicketNumber | None:
    match = TICKET_NUMBER_RE.match(ticket_number)
    if not match:
        return None
    yy, mm, dd, code, seq = match.groups()
    try:
        day = date(2000 + int(yy), int(mm), int(dd))
    except ValueError:
        return None
    return ParsedTicketNumber(issue_date=day, ticket_type=TicketType(code), sequence=int(seq))
