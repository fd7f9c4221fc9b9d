# app/report/schemas.py
from datetime import date
from pydantic import BaseModel

from app.ticket.schemas import TicketOut


class StatsTotals(BaseModel):
    total_issued: int = 0
    total_attended: int = 0
    sp_issued: int = 0
    sp_attended: int = 0
    sg_issued: int = 0
    sg_attended: int = 0
    se_issued: int = 0
    se_attended: int = 0
    avg_service_time: float = 0.0


class DailyStatsOut(StatsTotals):
    date: date

    model_config = {"from_attributes": True}


class DailyReportOut(BaseModel):
    stats: DailyStatsOut
    tickets: list[TicketOut]


class MonthlyReportOut(BaseModel):
    summary: StatsTotals
    daily_stats: list[DailyStatsOut]
    tickets: list[TicketOut]


class ServiceTimeReportOut(BaseModel):
    date: date
    overall: float
    by_type: dict[str, float]


class AbandonmentBreakdown(BaseModel):
    total: int
    abandoned: int
    rate: float


class AbandonmentReportOut(AbandonmentBreakdown):
    date: date
    by_type: dict[str, AbandonmentBreakdown]
