# app/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.database import init_db
from app.core.exceptions import QueueError
from app.core.logging_config import configure_logging
from app.queue.routes import queue_router, router as counter_router
from app.report.routes import router as report_router
from app.ticket.routes import router as ticket_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
init_db()

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(QueueError)
async def queue_error_handler(request: Request, exc: QueueError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Routers
app.include_router(ticket_router)
app.include_router(counter_router)
app.include_router(queue_router)
app.include_router(report_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
