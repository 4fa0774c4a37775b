"""
Time-window filtering.

Selects the feedback records that fall inside the window a chart or summary
request asks for.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import List, Optional

from src.errors import InvalidArgument
from src.models.feedback import FeedbackRecord
from src.pipeline.dates import parse_iso_date

logger = logging.getLogger(__name__)

DAILY = "daily"
SPECIFIC = "specific"
MONTHLY = "monthly"
RANGE = "range"
FULL = "full"

SUMMARY_MODES = (DAILY, SPECIFIC, MONTHLY)
TIMESERIES_MODES = (RANGE, FULL)


@dataclass(frozen=True)
class TimeWindow:
    """
    A time-window selector.

    `date` is used by daily/specific/monthly, `start`/`end` by range.
    Full ignores all three.
    """
    mode: str
    date: Optional[datetime] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


def _require_iso(data: dict, key: str) -> datetime:
    value = data.get(key)
    if not value:
        raise InvalidArgument(f"Missing '{key}' for this time frame.")
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid '{key}': expected an ISO-8601 date.")


def build_time_window(data: dict, now: Optional[datetime] = None) -> TimeWindow:
    """
    Build a TimeWindow from a request payload.

    Args:
        data: Request payload with timeFrame, date, startDate, endDate
        now: Reference time for monthly requests without a date

    Raises:
        InvalidArgument: If a date the mode needs is missing or malformed
    """
    mode = data.get("timeFrame")

    if mode in (DAILY, SPECIFIC):
        return TimeWindow(mode=mode, date=_require_iso(data, "date"))

    if mode == MONTHLY:
        if data.get("date"):
            return TimeWindow(mode=mode, date=_require_iso(data, "date"))
        return TimeWindow(mode=mode, date=now or datetime.now())

    if mode == RANGE:
        return TimeWindow(
            mode=mode,
            start=_require_iso(data, "startDate"),
            end=_require_iso(data, "endDate"),
        )

    return TimeWindow(mode=mode)


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def filter_records(
    records: List[FeedbackRecord],
    window: TimeWindow
) -> List[FeedbackRecord]:
    """
    Keep the records inside the window, preserving order.

    Unknown modes select nothing.
    """
    mode = window.mode

    if mode == FULL:
        return list(records)

    if mode in (DAILY, SPECIFIC):
        target = window.date.date()
        return [r for r in records if r.date.date() == target]

    if mode == MONTHLY:
        ref = window.date
        return [
            r for r in records
            if r.date.year == ref.year and r.date.month == ref.month
        ]

    if mode == RANGE:
        lower = start_of_day(window.start)
        upper = end_of_day(window.end)
        return [r for r in records if lower <= r.date <= upper]

    logger.warning(f"Unknown time frame {mode!r}, selecting no records")
    return []
