# app/queue/scheduler.py
"""Priority selection of the next ticket to call.

Calls alternate between the priority class and the other two:
SP -> (SE or SG) -> SP -> (SE or SG) ... When the class whose turn it is has
nothing waiting, the next class in line is called instead, so an empty class
never stalls the queue.
"""
from typing import Mapping, Sequence, TypeVar

from app.ticket.types import TicketType

T = TypeVar("T")

AFTER_PRIORITY = (TicketType.SE, TicketType.SG, TicketType.SP)
AFTER_OTHER = (TicketType.SP, TicketType.SE, TicketType.SG)


def call_order(last_type: TicketType | None) -> tuple[TicketType, ...]:
    return AFTER_PRIORITY if last_type == TicketType.SP else AFTER_OTHER


def select_next(
    pending_by_type: Mapping[TicketType, Sequence[T]],
    last_type: TicketType | None,
) -> T | None:
    """Return the head of the first non-empty queue in call order, or None.

    Each sequence must already be in FIFO order. Nothing is mutated.
    """
    for ticket_type in call_order(last_type):
        queue = pending_by_type.get(ticket_type) or ()
        if queue:
            return queue[0]
    return None
