# app/queue/service.py
"""Counter state machine and call coordination.

One ``QueueService`` owns every counter and the type of the last ticket served
by any of them. All state changes go through its lock so the pending-set read,
the selection, the store write and the global type update happen as one step.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.exceptions import CounterBusy, CounterNotFound, NoActiveService
from app.queue.scheduler import select_next
from app.queue.simulation import AbandonmentSimulator, RandomSource, estimate_service_time
from app.ticket import services as ticket_service
from app.ticket.models import Ticket
from app.ticket.types import TicketType

logger = logging.getLogger(__name__)


@dataclass
class CounterState:
    number: int
    busy: bool = False
    current_ticket_id: int | None = None
    current_ticket_number: str | None = None
    service_start: datetime | None = None
    last_called_type: TicketType | None = None


class QueueService:
    def __init__(
        self,
        simulator: AbandonmentSimulator | None = None,
        service_time_rng: RandomSource | None = None,
    ):
        self.simulator = simulator or AbandonmentSimulator()
        self.service_time_rng = service_time_rng
        self.last_global_type: TicketType | None = None
        self._counters: dict[int, CounterState] = {}
        self._lock = threading.RLock()

    # -------- Counters --------

    def _release(self, db: Session, counter: CounterState) -> None:
        # A dropped service goes back to the queue in its original place
        if counter.busy and counter.current_ticket_id is not None:
            ticket = ticket_service.release_ticket(db, counter.current_ticket_id)
            logger.info("Counter %d released %s", counter.number, ticket.ticket_number)

    def initialize_counter(self, db: Session, counter_number: int) -> CounterState:
        """Put a counter in the idle state with no history.

        A ticket the counter was serving is put back to wait.
        """
        with self._lock:
            previous = self._counters.get(counter_number)
            if previous is not None:
                self._release(db, previous)
            state = CounterState(number=counter_number)
            self._counters[counter_number] = state
            logger.info("Counter %d initialized", counter_number)
            return state

    def seat_counter(self, db: Session, counter_number: int) -> CounterState:
        """Initialize a counter unless it is in the middle of a service."""
        with self._lock:
            current = self._counters.get(counter_number)
            if current is not None and current.busy:
                raise CounterBusy(counter_number)
            return self.initialize_counter(db, counter_number)

    def get_counter(self, counter_number: int) -> CounterState:
        counter = self._counters.get(counter_number)
        if counter is None:
            raise CounterNotFound(counter_number)
        return counter

    def all_counters(self) -> list[CounterState]:
        with self._lock:
            return sorted(self._counters.values(), key=lambda c: c.number)

    def reset_all(self, db: Session) -> None:
        with self._lock:
            for counter in self._counters.values():
                self._release(db, counter)
            self._counters.clear()
            self.last_global_type = None
            logger.info("All counters reset")

    # -------- Calls --------

    def pending_by_type(self, db: Session, day: date) -> dict[TicketType, list[Ticket]]:
        return ticket_service.get_pending_by_type(db, day)

    def call_next(self, db: Session, counter_number: int, now: datetime) -> Ticket | None:
        """Call the next ticket to ``counter_number``.

        Returns None when nothing is waiting. No-shows are abandoned and the
        selection repeats against the refreshed queues; each retry retires one
        ticket, so the loop ends once the waiting set is exhausted.
        """
        with self._lock:
            counter = self.get_counter(counter_number)
            if counter.busy:
                raise CounterBusy(counter_number)

            day = now.date()
            pending = self.pending_by_type(db, day)
            while any(pending.values()):
                ticket = select_next(pending, self.last_global_type)

                if not self.simulator.will_attend():
                    ticket_service.mark_as_abandoned(db, ticket.id)
                    logger.info(
                        "Ticket %s did not show up at counter %d",
                        ticket.ticket_number,
                        counter_number,
                    )
                    pending = self.pending_by_type(db, day)
                    continue

                ticket_service.start_service(db, ticket.id, counter_number, now)
                counter.busy = True
                counter.current_ticket_id = ticket.id
                counter.current_ticket_number = ticket.ticket_number
                counter.service_start = ticket.service_start
                counter.last_called_type = ticket.ticket_type
                self.last_global_type = ticket.ticket_type
                logger.info("Counter %d calling %s", counter_number, ticket.ticket_number)
                return ticket

            logger.debug("Counter %d called with no waiting tickets", counter_number)
            return None

    def finish_service(self, db: Session, counter_number: int, now: datetime) -> Ticket:
        with self._lock:
            counter = self.get_counter(counter_number)
            if not counter.busy or counter.current_ticket_id is None:
                raise NoActiveService(counter_number)

            ticket = ticket_service.finish_service(db, counter.current_ticket_id, now)

            counter.busy = False
            counter.current_ticket_id = None
            counter.current_ticket_number = None
            counter.service_start = None
            logger.info(
                "Counter %d finished %s in %s min",
                counter_number,
                ticket.ticket_number,
                ticket.service_duration,
            )
            return ticket

    def discard_pending(self, db: Session, day: date) -> int:
        """End of day: abandon every unresolved ticket and free the counters."""
        with self._lock:
            discarded = ticket_service.discard_pending_tickets(db, day)
            for counter in self._counters.values():
                if counter.current_ticket_id is None:
                    continue
                if not ticket_service.get_ticket(db, counter.current_ticket_id).is_pending:
                    counter.busy = False
                    counter.current_ticket_id = None
                    counter.current_ticket_number = None
                    counter.service_start = None
            return discarded

    # -------- Display / estimates --------

    def queue_stats(self, db: Session, day: date, recent_limit: int) -> dict:
        counters = self.all_counters()
        return {
            "pending": ticket_service.get_pending_count(db, day),
            "last_called": ticket_service.get_recently_served(db, recent_limit),
            "active_counters": len(counters),
            "busy_counters": sum(1 for c in counters if c.busy),
            "last_global_type": self.last_global_type,
        }

    def estimate_service_time(self, ticket_type: TicketType) -> float:
        return estimate_service_time(ticket_type, self.service_time_rng)


@lru_cache
def get_queue_service() -> QueueService:
    settings = get_settings()
    return QueueService(simulator=AbandonmentSimulator(settings.ABANDONMENT_PROBABILITY))
