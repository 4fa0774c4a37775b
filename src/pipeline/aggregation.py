"""
Feedback Aggregator.

Computes headline averages for single-period windows and bucketed
time series for range and full windows.
"""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

import pandas as pd

from src.models.feedback import FeedbackRecord, SummaryGraph, TimeseriesGraph
from src.pipeline.time_window import FULL, SUMMARY_MODES, TIMESERIES_MODES

logger = logging.getLogger(__name__)

DAY_KEY_FORMAT = "%Y-%m-%d"
MONTH_KEY_FORMAT = "%Y-%m"

# Day buckets are chart points, one decimal place is enough
DAY_PLACES = 1
MONTH_PLACES = 2


def round_half_up(value: float, places: int) -> float:
    """Round on the decimal representation, ties away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def _day_label(key: str) -> str:
    day = datetime.strptime(key, DAY_KEY_FORMAT)
    return f"{day:%b} {day.day}"


def _month_label(key: str) -> str:
    return datetime.strptime(key, MONTH_KEY_FORMAT).strftime("%b %Y")


class FeedbackAggregator:
    """
    Aggregates filtered feedback records for one request.
    """

    def summarize(self, records: List[FeedbackRecord]) -> Optional[SummaryGraph]:
        """
        Count and average the records.

        Returns:
            SummaryGraph rounded to 2 decimal places, or None for no records
        """
        total = len(records)
        if total == 0:
            return None

        sum_understanding = sum(r.understanding for r in records)
        sum_instructor = sum(r.instructor for r in records)

        return SummaryGraph(
            total_feedbacks=total,
            avg_understanding=round_half_up(sum_understanding / total, 2),
            avg_instructor=round_half_up(sum_instructor / total, 2),
        )

    def timeseries(
        self,
        records: List[FeedbackRecord],
        by_month: bool = False
    ) -> Optional[TimeseriesGraph]:
        """
        Average the records per day (or per month).

        Args:
            records: Filtered feedback records
            by_month: Bucket by calendar month instead of calendar day

        Returns:
            TimeseriesGraph ordered by ascending bucket key, or None for no records
        """
        if not records:
            return None

        if by_month:
            key_format, places, label = MONTH_KEY_FORMAT, MONTH_PLACES, _month_label
        else:
            key_format, places, label = DAY_KEY_FORMAT, DAY_PLACES, _day_label

        df = pd.DataFrame([
            {
                "bucket": r.date.strftime(key_format),
                "understanding": r.understanding,
                "instructor": r.instructor,
            }
            for r in records
        ])
        means = df.groupby("bucket", sort=True)[["understanding", "instructor"]].mean()

        logger.debug(f"Aggregated {len(records)} records into {len(means)} buckets")

        return TimeseriesGraph(
            labels=[label(key) for key in means.index],
            understanding=[round_half_up(v, places) for v in means["understanding"]],
            instructor=[round_half_up(v, places) for v in means["instructor"]],
        )

    def aggregate(
        self,
        records: List[FeedbackRecord],
        mode: str
    ) -> Tuple[Optional[SummaryGraph], Optional[TimeseriesGraph]]:
        """
        Build the chart payload for a time-window mode.

        Returns:
            (summary, timeseries); at most one is set, both are None for no records
        """
        if not records:
            return None, None

        if mode in SUMMARY_MODES:
            return self.summarize(records), None
        if mode in TIMESERIES_MODES:
            return None, self.timeseries(records, by_month=(mode == FULL))

        return None, None


def aggregate(
    records: List[FeedbackRecord],
    mode: str
) -> Tuple[Optional[SummaryGraph], Optional[TimeseriesGraph]]:
    return FeedbackAggregator().aggregate(records, mode)
