"""
Date normalization.

Parses the heterogeneous date strings found in feedback sheets, plus the
ISO dates sent by the dashboard client.
"""

import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)


# Tried in order, first match wins. Timestamped formats come before bare
# dates and month-first before day-first, so "03/04/2024" is March 4.
SUPPORTED_DATE_FORMATS = (
    "%m/%d/%Y %H:%M:%S",     # M/d/yyyy H:mm:ss
    "%m/%d/%Y %H:%M",        # M/d/yyyy H:mm
    "%Y-%m-%d %H:%M:%S",     # yyyy-MM-dd HH:mm:ss
    "%Y-%m-%d %H:%M",        # yyyy-MM-dd HH:mm
    "%B %d, %Y %I:%M %p",    # MMMM d, yyyy h:mm a
    "%b %d, %Y",             # MMM d, yyyy
    "%Y-%m-%d",              # yyyy-MM-dd
    "%m/%d/%Y",              # M/d/yyyy
    "%d/%m/%Y",              # dd/MM/yyyy
    "%d-%b-%Y",              # dd-MMM-yyyy
)


def normalize_date(text: str) -> Optional[datetime]:
    """
    Parse a sheet date cell.

    Args:
        text: Raw cell text (may be empty)

    Returns:
        Parsed datetime, or None if the text is empty or matches no
        supported format
    """
    if not text:
        return None

    candidate = text.strip()
    for date_format in SUPPORTED_DATE_FORMATS:
        try:
            return datetime.strptime(candidate, date_format)
        except ValueError:
            continue

    logger.warning(f'Unrecognized date format: "{text}"')
    return None


def parse_iso_date(text: str) -> datetime:
    """
    Parse an ISO-8601 date or timestamp sent by the client.

    Aware timestamps are shifted to local time and made naive so they
    compare against sheet dates.

    Raises:
        ValueError: If the text is empty or not ISO-8601
    """
    if not text or not isinstance(text, str):
        raise ValueError(f"Invalid ISO date: {text!r}")

    parsed = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
