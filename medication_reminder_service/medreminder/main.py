from fastapi import FastAPI
from medreminder.core import engine_config
from medreminder.core.logging_config import configure_logging
from medreminder.schemas.models import SCHEDULE_TYPES
from medreminder.api.routes_reminders import router as reminders_router
from medreminder.api.routes_sync import router as sync_router

configure_logging()

SERVICE_NAME = "Medication Reminder Engine"

app = FastAPI(title=SERVICE_NAME, version="1.0")

app.include_router(reminders_router)
app.include_router(sync_router)


@app.get("/health")
def health():
    return {
        "ok": True,
        "refresh_days_ahead": engine_config.REFRESH_DAYS_AHEAD,
        "default_plan_months": engine_config.DEFAULT_PLAN_MONTHS,
    }


@app.get("/")
def root():
    return {
        "ok": True,
        "service": SERVICE_NAME,
        "schedule_types": list(SCHEDULE_TYPES),
    }
