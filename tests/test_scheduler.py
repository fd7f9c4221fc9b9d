# tests/test_scheduler.py
import random

from app.queue.scheduler import call_order, select_next
from app.ticket.types import TicketType

SP, SG, SE = TicketType.SP, TicketType.SG, TicketType.SE


def pending(sp=(), sg=(), se=()):
    return {SP: list(sp), SG: list(sg), SE: list(se)}


def test_empty_queue_returns_none():
    assert select_next(pending(), None) is None
    assert select_next(pending(), SP) is None
    assert select_next({}, SG) is None


def test_first_call_prefers_priority():
    assert select_next(pending(sp=["a1"], sg=["b1"], se=["c1"]), None) == "a1"


def test_after_priority_calls_exam_then_general():
    assert select_next(pending(sp=["a2"], sg=["b1"], se=["c1"]), SP) == "c1"
    assert select_next(pending(sp=["a2"], sg=["b1"]), SP) == "b1"


def test_after_priority_falls_back_to_priority():
    assert select_next(pending(sp=["a2"]), SP) == "a2"


def test_after_other_types_calls_priority():
    assert select_next(pending(sp=["a1"], sg=["b1"], se=["c1"]), SG) == "a1"
    assert select_next(pending(sp=["a1"], sg=["b1"], se=["c1"]), SE) == "a1"


def test_priority_turn_with_no_priority_does_not_stall():
    assert select_next(pending(sg=["b1"], se=["c1"]), SG) == "c1"
    assert select_next(pending(sg=["b1"]), SE) == "b1"


def test_fifo_within_type():
    assert select_next(pending(sg=["b1", "b2", "b3"]), None) == "b1"


def test_selection_does_not_mutate_pending():
    queues = pending(sp=["a1"], sg=["b1"])
    select_next(queues, None)
    assert queues == pending(sp=["a1"], sg=["b1"])


def test_call_order():
    assert call_order(SP) == (SE, SG, SP)
    assert call_order(None) == (SP, SE, SG)
    assert call_order(SG) == (SP, SE, SG)


def test_spec_scenario_a_then_b_then_empty():
    queues = pending(sp=["a1"], sg=["b1"])
    last = None

    first = select_next(queues, last)
    assert first == "a1"
    queues[SP].remove(first)
    last = SP

    second = select_next(queues, last)
    assert second == "b1"
    queues[SG].remove(second)
    last = SG

    assert select_next(queues, last) is None


def test_no_consecutive_priority_unless_only_priority_waits():
    for seed in range(50):
        rnd = random.Random(seed)
        queues = {t: [f"{t.value}{i}" for i in range(rnd.randint(0, 8))] for t in TicketType}
        ticket_type_of = {name: t for t, names in queues.items() for name in names}

        last = None
        previous_only_sp = False
        while True:
            only_sp = bool(queues[SP]) and not queues[SG] and not queues[SE]
            chosen = select_next(queues, last)
            if chosen is None:
                break
            served = ticket_type_of[chosen]
            if last == SP and served == SP:
                assert only_sp and previous_only_sp
            queues[served].remove(chosen)
            previous_only_sp = only_sp
            last = served
