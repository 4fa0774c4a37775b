"""
Unit tests for the feedback aggregator.
"""

from datetime import datetime

import pytest

from src.models.feedback import FeedbackRecord, SummaryGraph
from src.pipeline.aggregation import FeedbackAggregator, aggregate, round_half_up
from src.pipeline.extraction import extract_records
from src.pipeline.time_window import TimeWindow, filter_records


def _record(day: datetime, understanding: float, instructor: float) -> FeedbackRecord:
    return FeedbackRecord(date=day, understanding=understanding, instructor=instructor)


@pytest.mark.parametrize("mode", ["daily", "specific", "monthly", "range", "full", "weekly"])
def test_empty_records_yield_nothing(mode):
    assert aggregate([], mode) == (None, None)


def test_daily_scenario_summary():
    rows = [
        ["Date", "Understanding", "Instructor", "Comment"],
        ["1/5/2024", "4", "5", "great"],
        ["1/5/2024", "2", "3", "na"],
    ]
    records = filter_records(
        extract_records(rows), TimeWindow("daily", date=datetime(2024, 1, 5))
    )

    summary, timeseries = aggregate(records, "daily")

    assert summary == SummaryGraph(total_feedbacks=2, avg_understanding=3.0, avg_instructor=4.0)
    assert timeseries is None


def test_monthly_summary_rounds_to_two_places():
    records = [
        _record(datetime(2024, 1, 1), 1, 5),
        _record(datetime(2024, 1, 2), 2, 5),
        _record(datetime(2024, 1, 3), 2, 4),
    ]

    summary, _ = aggregate(records, "monthly")

    assert summary.total_feedbacks == 3
    assert summary.avg_understanding == 1.67
    assert summary.avg_instructor == 4.67


def test_range_groups_by_day_ascending():
    records = [
        _record(datetime(2024, 1, 6, 10), 5, 5),
        _record(datetime(2024, 1, 5, 9), 4, 3),
        _record(datetime(2024, 1, 5, 15), 5, 4),
        _record(datetime(2024, 1, 5, 16), 5, 4),
    ]

    summary, timeseries = aggregate(records, "range")

    assert summary is None
    assert timeseries.labels == ["Jan 5", "Jan 6"]
    assert timeseries.understanding == [4.7, 5.0]
    assert timeseries.instructor == [3.7, 5.0]


def test_full_groups_by_month():
    records = [
        _record(datetime(2024, 2, 10), 4, 4),
        _record(datetime(2023, 12, 31), 3, 2),
        _record(datetime(2024, 2, 11), 5, 3),
        _record(datetime(2024, 2, 12), 5, 3),
    ]

    summary, timeseries = aggregate(records, "full")

    assert summary is None
    assert timeseries.to_dict() == {
        "labels": ["Dec 2023", "Feb 2024"],
        "understanding": [3.0, 4.67],
        "instructor": [2.0, 3.33],
    }


def test_summary_payload_keys():
    summary = FeedbackAggregator().summarize([_record(datetime(2024, 1, 5), 4, 5)])
    assert summary.to_dict() == {
        "totalFeedbacks": 1,
        "avgUnderstanding": 4.0,
        "avgInstructor": 5.0,
    }


@pytest.mark.parametrize("value, places, expected", [
    (2.345, 2, 2.35),
    (0.25, 1, 0.3),
    (4.666666, 1, 4.7),
    (3.0, 2, 3.0),
    (1.005, 2, 1.01),
])
def test_round_half_up(value, places, expected):
    assert round_half_up(value, places) == expected


def test_unknown_mode_with_records_yields_nothing():
    records = [_record(datetime(2024, 1, 5), 4, 5)]
    assert aggregate(records, "weekly") == (None, None)
