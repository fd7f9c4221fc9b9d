# app/queue/simulation.py
import random
from typing import Callable

from app.ticket.types import TicketType

# Returns a float in [0, 1)
RandomSource = Callable[[], float]


class AbandonmentSimulator:
    """Bernoulli no-show trial made when a ticket is called."""

    def __init__(self, probability: float = 0.05, rng: RandomSource | None = None):
        if not 0.0 <= probability <= 1.0:
            raise ValueError("Abandonment probability must be between 0 and 1")
        self.probability = probability
        self.rng = rng or random.random

    def will_attend(self) -> bool:
        return self.rng() >= self.probability


def estimate_service_time(ticket_type: TicketType, rng: RandomSource | None = None) -> float:
    """Sample a service time in minutes for one ticket of the given type."""
    rng = rng or random.random
    if ticket_type == TicketType.SP:
        return 15 + (rng() * 10 - 5)
    if ticket_type == TicketType.SG:
        return 5 + (rng() * 6 - 3)
    if ticket_type == TicketType.SE:
        # 95% under a minute, the rest take 5
        return rng() if rng() < 0.95 else 5.0
    return 5.0
