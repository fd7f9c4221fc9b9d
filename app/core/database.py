# app/core/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import get_settings

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None) -> None:
    """Create the ticket and daily_stats tables if they are missing."""
    # Registers the models on Base.metadata
    from app.ticket import models as ticket_models  # noqa: F401
    from app.report import models as report_models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


# Common DB dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
