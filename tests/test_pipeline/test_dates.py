"""
Unit tests for date normalization.
"""

import logging
from datetime import datetime

import pytest

from src.pipeline.dates import normalize_date, parse_iso_date


@pytest.mark.parametrize("text, expected", [
    ("1/5/2024 9:30:15", datetime(2024, 1, 5, 9, 30, 15)),
    ("1/5/2024 9:30", datetime(2024, 1, 5, 9, 30)),
    ("2024-01-05 14:30:00", datetime(2024, 1, 5, 14, 30)),
    ("2024-01-05 14:30", datetime(2024, 1, 5, 14, 30)),
    ("January 5, 2024 3:30 PM", datetime(2024, 1, 5, 15, 30)),
    ("Jan 5, 2024", datetime(2024, 1, 5)),
    ("2024-01-05", datetime(2024, 1, 5)),
    ("1/5/2024", datetime(2024, 1, 5)),
    ("25/01/2024", datetime(2024, 1, 25)),
    ("05-Jan-2024", datetime(2024, 1, 5)),
])
def test_supported_formats(text, expected):
    """Each supported format normalizes to the expected date."""
    assert normalize_date(text) == expected


def test_ambiguous_date_is_month_first():
    """03/04/2024 is March 4, never April 3."""
    assert normalize_date("03/04/2024") == datetime(2024, 3, 4)


def test_day_first_fallback_when_month_invalid():
    assert normalize_date("13/04/2024") == datetime(2024, 4, 13)


def test_surrounding_whitespace_is_ignored():
    assert normalize_date("  2024-01-05  ") == datetime(2024, 1, 5)


def test_empty_text_is_invalid():
    assert normalize_date("") is None


def test_unrecognized_text_is_invalid_and_logged(caplog):
    with caplog.at_level(logging.WARNING):
        assert normalize_date("next tuesday") is None
    assert "Unrecognized date format" in caplog.text


def test_impossible_date_is_invalid():
    assert normalize_date("2024-02-30") is None


def test_parse_iso_date_plain_day():
    assert parse_iso_date("2024-01-05") == datetime(2024, 1, 5)


def test_parse_iso_date_with_zulu_suffix_is_naive():
    parsed = parse_iso_date("2024-01-05T10:00:00.000Z")
    assert parsed.tzinfo is None


@pytest.mark.parametrize("text", ["", "05/01/2024", None])
def test_parse_iso_date_rejects_non_iso(text):
    with pytest.raises(ValueError):
        parse_iso_date(text)


def test_short_years_are_not_accepted():
    assert normalize_date("1/5/24") is None
    assert normalize_date("24-01-05") is None
