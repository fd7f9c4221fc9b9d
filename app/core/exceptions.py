# app/core/exceptions.py
"""Domain errors raised by the queue core.

Each carries the HTTP status the API answers with; the handler registered in
``app.main`` renders them as ``{"detail": message}``.
"""


class QueueError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CounterNotFound(QueueError):
    status_code = 404

    def __init__(self, counter_number: int):
        super().__init__(f"Counter {counter_number} not initialized")
        self.counter_number = counter_number


class CounterBusy(QueueError):
    status_code = 409

    def __init__(self, counter_number: int):
        super().__init__(f"Counter {counter_number} is busy")
        self.counter_number = counter_number


class NoActiveService(QueueError):
    status_code = 409

    def __init__(self, counter_number: int):
        super().__init__(f"Counter {counter_number} has no active service")
        self.counter_number = counter_number


class TicketNotFound(QueueError):
    status_code = 404

    def __init__(self, ticket_ref: int | str):
        super().__init__("Ticket not found")
        self.ticket_ref = ticket_ref


class TicketAlreadyResolved(QueueError):
    status_code = 409

    def __init__(self, ticket_number: str):
        super().__init__(f"Ticket {ticket_number} is already attended or abandoned")
        self.ticket_number = ticket_number


class OutsideServiceHours(QueueError):
    status_code = 403

    def __init__(self, open_hour: int, close_hour: int):
        super().__init__(f"Outside service hours ({open_hour}h - {close_hour}h)")
        self.open_hour = open_hour
        self.close_hour = close_hour


__all__ = [
    "QueueError",
    "CounterNotFound",
    "CounterBusy",
    "NoActiveService",
    "TicketNotFound",
    "TicketAlreadyResolved",
    "OutsideServiceHours",
]
