# app/report/models.py
from sqlalchemy import Column, Date, Float, Integer
from app.core.database import Base


class DailyStats(Base):
    """Per-day aggregate, always rebuilt from that day's tickets."""

    __tablename__ = "daily_stats"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, unique=True, index=True, nullable=False)
    total_issued = Column(Integer, default=0, nullable=False)
    total_attended = Column(Integer, default=0, nullable=False)
    sp_issued = Column(Integer, default=0, nullable=False)
    sp_attended = Column(Integer, default=0, nullable=False)
    sg_issued = Column(Integer, default=0, nullable=False)
    sg_attended = Column(Integer, default=0, nullable=False)
    se_issued = Column(Integer, default=0, nullable=False)
    se_attended = Column(Integer, default=0, nullable=False)
    avg_service_time = Column(Float, default=0.0, nullable=False)
