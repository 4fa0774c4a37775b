"""
Feedback row extraction.

Turns raw sheet rows ([date, understanding, instructor, comment]) into
FeedbackRecord objects.
"""

import logging
import math
from typing import Any, List, Sequence

from src.models.feedback import FeedbackRecord
from src.pipeline.dates import normalize_date

logger = logging.getLogger(__name__)


def _cell(row: Sequence[Any], index: int) -> Any:
    if index < len(row):
        return row[index]
    return None


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _to_number(value: Any) -> float:
    """Coerce a rating cell; anything non-numeric counts as 0."""
    text = _to_text(value).strip()
    if not text:
        return 0.0
    try:
        number = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def extract_records(rows: Sequence[Sequence[Any]]) -> List[FeedbackRecord]:
    """
    Normalize raw sheet rows into feedback records.

    Args:
        rows: Sheet values, first row is the header

    Returns:
        Records in sheet order; rows with an empty or unparseable date are dropped
    """
    if not rows or len(rows) < 2:
        return []

    records = []
    dropped = 0
    for row in rows[1:]:
        row = row or []
        date = normalize_date(_to_text(_cell(row, 0)))
        if date is None:
            dropped += 1
            continue

        records.append(FeedbackRecord(
            date=date,
            understanding=_to_number(_cell(row, 1)),
            instructor=_to_number(_cell(row, 2)),
            comment=_to_text(_cell(row, 3)).strip(),
        ))

    if dropped:
        logger.debug(f"Dropped {dropped} rows with invalid dates")

    return records
