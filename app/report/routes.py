# app/report/routes.py
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.report import services as report_service
from app.report.schemas import (
    AbandonmentReportOut,
    DailyReportOut,
    DailyStatsOut,
    MonthlyReportOut,
    ServiceTimeReportOut,
)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/daily/{day}", response_model=DailyReportOut)
def daily(day: date, db: Session = Depends(get_db)):
    return report_service.daily_report(db, day)


@router.get("/daily/{day}/csv")
def daily_csv(day: date, db: Session = Depends(get_db)):
    tickets = report_service.daily_report(db, day)["tickets"]
    return Response(
        content=report_service.export_tickets_csv(tickets),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="report-{day.isoformat()}.csv"'},
    )


@router.get("/monthly/{year}/{month}", response_model=MonthlyReportOut)
def monthly(
    year: int = Path(..., ge=2000, le=2099),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    return report_service.monthly_report(db, year, month)


@router.get("/service-time/{day}", response_model=ServiceTimeReportOut)
def service_time(day: date, db: Session = Depends(get_db)):
    return report_service.service_time_report(db, day)


@router.get("/abandonment/{day}", response_model=AbandonmentReportOut)
def abandonment(day: date, db: Session = Depends(get_db)):
    return report_service.abandonment_report(db, day)


@router.get("/stats/{day}", response_model=DailyStatsOut)
def stats(day: date, db: Session = Depends(get_db)):
    row = report_service.get_daily_stats(db, day)
    if not row:
        raise HTTPException(status_code=404, detail="No statistics for this date")
    return row
