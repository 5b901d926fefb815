import os
from medreminder.core.env import load_env

load_env()

# today + N days, as the daily background refresh plans it
REFRESH_DAYS_AHEAD = int(os.getenv("REMINDER_REFRESH_DAYS_AHEAD", "2"))
# plan horizon for a medication with no end date
DEFAULT_PLAN_MONTHS = int(os.getenv("REMINDER_DEFAULT_PLAN_MONTHS", "1"))

# extra loop turns allowed on top of (24h / interval) for INTERVAL schedules
INTERVAL_ITERATION_SLACK = int(os.getenv("INTERVAL_ITERATION_SLACK", "5"))

LOG_LEVEL = os.getenv("REMINDER_LOG_LEVEL", "INFO").upper()

STORAGE_DATE_FORMAT = "%d/%m/%Y"  # dd/MM/yyyy
