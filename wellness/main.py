from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from wellness.db.base import get_db
from wellness.core.config import settings
from wellness.core.logging import configure_logging
from wellness.routers import activities as activities_router
from wellness.routers import dashboard as dashboard_router
from wellness.core.errors import (
    WellnessException,
    wellness_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging()

app = FastAPI(
    title="Wellness Dashboard API",
    description=(
        "**Wellness activity log and dashboard**\n\n"
        "Stores mood check-ins, exercises, games and therapy sessions, and derives "
        "today's stats, a 28-day activity heatmap and up to three prioritized insights.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(WellnessException, wellness_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(activities_router.router)
app.include_router(dashboard_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception:
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
