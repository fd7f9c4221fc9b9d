# app/ticket/models.py
from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Integer, String, Time
from app.core.database import Base
from app.ticket.types import TicketType


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    ticket_number = Column(String(11), unique=True, index=True, nullable=False)
    ticket_type = Column(Enum(TicketType, native_enum=False, length=2), index=True, nullable=False)
    issue_date = Column(Date, index=True, nullable=False)
    issue_time = Column(Time, nullable=False)
    attended = Column(Boolean, default=False, nullable=False, index=True)
    abandoned = Column(Boolean, default=False, nullable=False)
    counter_number = Column(Integer, nullable=True)
    service_start = Column(DateTime, nullable=True)
    service_end = Column(DateTime, nullable=True)
    service_duration = Column(Integer, nullable=True)  # whole minutes

    @property
    def is_pending(self) -> bool:
        return not self.attended and not self.abandoned

    @property
    def is_waiting(self) -> bool:
        return self.is_pending and self.counter_number is None
