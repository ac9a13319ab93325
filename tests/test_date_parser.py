"""Tests for date parsing and month arithmetic."""

import pytest
from datetime import date, datetime, timedelta, timezone
from dateutil.relativedelta import relativedelta
from bookkit.utils.date_parser import elapsed_months, months_before, parse_date, to_naive_utc


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)


def test_parse_months_ago():
    """Test parsing 'N months ago'."""
    assert parse_date("3 months ago") == date.today() - relativedelta(months=3)
    assert parse_date("1 month ago") == date.today() - relativedelta(months=1)


def test_parse_invalid_date():
    """Test that invalid dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")
    with pytest.raises(ValueError):
        parse_date("many months ago")


def test_to_naive_utc():
    aware = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    assert to_naive_utc(aware) == datetime(2024, 1, 1, 10, 0)
    assert to_naive_utc(date(2024, 1, 1)) == datetime(2024, 1, 1)


def test_elapsed_months_uses_thirty_day_months():
    assert elapsed_months(date(2024, 1, 1), date(2024, 1, 31)) == 1.0
    assert elapsed_months(date(2024, 1, 1), datetime(2024, 3, 1, tzinfo=timezone.utc)) == 2.0


def test_months_before_uses_calendar_months():
    assert months_before(datetime(2024, 8, 31), 6) == datetime(2024, 2, 29)
