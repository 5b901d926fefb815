# medreminder/utils/time_parse.py
from __future__ import annotations

import json
import re
from datetime import date, datetime, time
from typing import Any, List, Optional

from medreminder.core.engine_config import STORAGE_DATE_FORMAT
from medreminder.core.logging_config import LOGGER

SECONDS_PER_DAY = 24 * 60 * 60
END_OF_DAY_SECONDS = SECONDS_PER_DAY - 1

_TIME_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$")

def seconds_of_day(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second

def time_from_seconds(total_seconds: int) -> time:
    total_seconds = max(0, min(END_OF_DAY_SECONDS, total_seconds))
    h, rest = divmod(total_seconds, 3600)
    m, s = divmod(rest, 60)
    return time(h, m, s)

def parse_time_of_day(value: Any) -> Optional[time]:
    """
    "HH:MM" / "HH:MM:SS" (or an existing time) -> time.
    Returns None and logs on anything else; callers skip that entry.
    """
    if isinstance(value, time):
        return value.replace(microsecond=0, tzinfo=None)
    txt = str(value or "").strip()
    if not _TIME_RE.match(txt):
        LOGGER.warning("Skipping malformed time-of-day %r", value)
        return None
    fmt = "%H:%M:%S" if txt.count(":") == 2 else "%H:%M"
    try:
        return datetime.strptime(txt, fmt).time()
    except ValueError:
        LOGGER.warning("Skipping out-of-range time-of-day %r", value)
        return None

def parse_storage_date(value: Any) -> Optional[date]:
    """dd/MM/yyyy -> date. Blank means 'not set'; garbage is logged and treated as not set."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    txt = str(value).strip()
    if not txt:
        return None
    try:
        return datetime.strptime(txt, STORAGE_DATE_FORMAT).date()
    except ValueError:
        LOGGER.warning("Ignoring malformed medication date %r", value)
        return None

def format_storage_date(d: Optional[date]) -> Optional[str]:
    return d.strftime(STORAGE_DATE_FORMAT) if d else None

def format_hhmm(t: time) -> str:
    if t.second:
        return t.strftime("%H:%M:%S")
    return t.strftime("%H:%M")

def split_time_list(value: Any) -> List[str]:
    """
    Accepts a list, a comma-joined string ("08:00,20:00") or a JSON array
    string ('["08:00","20:00"]'). Order is preserved; entries are not parsed here.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [format_hhmm(v) if isinstance(v, time) else str(v).strip() for v in value]
    txt = str(value).strip()
    if not txt:
        return []
    if txt.startswith("["):
        try:
            decoded = json.loads(txt)
        except json.JSONDecodeError:
            LOGGER.warning("Ignoring malformed time list %r", value)
            return []
        if isinstance(decoded, list):
            return [str(v).strip() for v in decoded]
        return []
    # empty tokens are kept so a blank first entry still counts as the first entry
    return [part.strip() for part in txt.split(",")]

def parse_weekdays(value: Any) -> List[int]:
    """
    Weekday CSV ("1,3,5") or list -> ISO weekday ints (Mon=1..Sun=7).
    Non-numeric tokens and numbers outside 1..7 are dropped.
    """
    if value is None:
        return []
    tokens = value if isinstance(value, (list, tuple, set)) else str(value).split(",")
    days: List[int] = []
    for tok in tokens:
        try:
            d = int(str(tok).strip())
        except ValueError:
            if str(tok).strip():
                LOGGER.warning("Skipping malformed weekday %r", tok)
            continue
        if 1 <= d <= 7:
            if d not in days:
                days.append(d)
        else:
            LOGGER.warning("Skipping out-of-range weekday %r", tok)
    return days
