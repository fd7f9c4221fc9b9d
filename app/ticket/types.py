# app/ticket/types.py
from dataclasses import dataclass
from enum import Enum


class TicketType(str, Enum):
    SP = "SP"  # priority
    SG = "SG"  # general
    SE = "SE"  # exam pickup


@dataclass(frozen=True)
class TicketTypeInfo:
    code: TicketType
    name: str
    rank: int
    mean_service_minutes: float


# Rank 1 is called first: SP > SE > SG
TICKET_TYPES: dict[TicketType, TicketTypeInfo] = {
    TicketType.SP: TicketTypeInfo(TicketType.SP, "Priority", 1, 15.0),
    TicketType.SE: TicketTypeInfo(TicketType.SE, "Exam pickup", 2, 1.0),
    TicketType.SG: TicketTypeInfo(TicketType.SG, "General", 3, 5.0),
}
