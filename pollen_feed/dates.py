"""Date helpers: request windows for the sensor API and labels for display."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pollen_feed.errors import InvalidDateError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="dates")

API_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# en-US month names; labels must not depend on the process locale.
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class TimeWindow:
    """UTC start/end of a requested day."""
    start: dt.datetime  # timezone-aware, UTC
    end: dt.datetime  # timezone-aware, UTC

    @property
    def starting(self) -> str:
        return self.start.strftime(API_TIMESTAMP_FORMAT)

    @property
    def ending(self) -> str:
        return self.end.strftime(API_TIMESTAMP_FORMAT)


def today_in(tz_name: Optional[str]) -> dt.date:
    """Current calendar date in `tz_name`, or the host's local date if unset or unknown."""
    if not tz_name:
        return dt.date.today()
    try:
        return dt.datetime.now(ZoneInfo(tz_name)).date()
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{tz_name}'; using the host's local date")
        return dt.date.today()


def resolve_requested_date(
    raw_param: Optional[str],
    today: Optional[dt.date] = None,
    tz_name: Optional[str] = None,
) -> dt.date:
    """Return the calendar date named by a `date=YYYY-MM-DD` parameter.

    A missing or blank parameter means today, taken in `tz_name` when given.
    Anything else that does not parse as YYYY-MM-DD raises InvalidDateError
    instead of producing a malformed request downstream.
    """
    if raw_param is None or not raw_param.strip():
        return today or today_in(tz_name)

    value = raw_param.strip()
    parts = value.split("-")
    if len(parts) != 3 or len(parts[0]) != 4 or not all(p.isdigit() for p in parts):
        raise InvalidDateError(f"Invalid date '{value}'; expected YYYY-MM-DD")
    try:
        return dt.date(int(parts[0]), int(parts[1]), int(parts[2]))
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date '{value}': {exc}") from exc


def to_utc_window(date: dt.date) -> TimeWindow:
    """Midnight to 23:59:59 UTC of the given date."""
    start = dt.datetime(date.year, date.month, date.day, 0, 0, 0, tzinfo=dt.timezone.utc)
    end = dt.datetime(date.year, date.month, date.day, 23, 59, 59, tzinfo=dt.timezone.utc)
    return TimeWindow(start=start, end=end)


def to_human_label(date: dt.date) -> str:
    """Long-form label, e.g. "September 12, 2024"."""
    return f"{MONTH_NAMES[date.month - 1]} {date.day}, {date.year}"


def format_time_label(moment: str) -> str:
    """Render a moment's wall-clock time as "As of 3:05 PM".

    The HH:MM is taken from the moment string as returned by the API, without
    shifting it to another timezone. Moments without a usable time part (e.g.
    date-only daily moments) get an empty label.
    """
    if "T" not in moment:
        return ""
    fields = moment.split("T", 1)[1].split(":")
    if len(fields) < 2 or not fields[0].isdigit() or not fields[1][:2].isdigit():
        return ""
    hour = int(fields[0])
    minute = fields[1][:2]
    ampm = "PM" if hour >= 12 else "AM"
    hour = hour % 12 or 12
    return f"As of {hour}:{minute} {ampm}"
