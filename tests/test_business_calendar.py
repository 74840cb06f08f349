"""Tests for selling-day counting and date helpers."""

from datetime import date, datetime, timedelta

import pytest

from salesdesk.exceptions import ParseError, ValidationError
from salesdesk.pacing.business_calendar import (
    count_selling_days,
    first_day_of_month,
    is_selling_day,
    last_day_of_month,
    parse_date,
)


class TestCountSellingDays:
    def test_single_sunday(self):
        assert count_selling_days(date(2024, 3, 10), date(2024, 3, 10)) == 0

    def test_single_weekday(self):
        for d in (4, 5, 6, 7, 8, 9):  # Mon..Sat, March 2024
            day = date(2024, 3, d)
            assert count_selling_days(day, day) == 1

    def test_rest_of_march_2024(self):
        # 22 days, 4 Sundays (10, 17, 24, 31)
        assert count_selling_days(date(2024, 3, 10), date(2024, 3, 31)) == 18

    def test_full_week(self):
        assert count_selling_days(date(2024, 3, 4), date(2024, 3, 10)) == 6

    def test_from_after_to(self):
        assert count_selling_days(date(2024, 3, 31), date(2024, 3, 1)) == 0

    def test_matches_day_by_day_count(self):
        start = date(2024, 2, 1)
        for length in range(0, 40):
            end = start + timedelta(days=length)
            expected = sum(
                1 for i in range(length + 1) if (start + timedelta(days=i)).weekday() != 6
            )
            assert count_selling_days(start, end) == expected

    def test_accepts_strings(self):
        assert count_selling_days("2024-03-10", "2024-03-31") == 18

    def test_string_is_a_calendar_date(self):
        # Sunday regardless of process time zone
        assert count_selling_days("2024-03-10", "2024-03-10") == 0

    def test_datetime_bounds_use_their_calendar_date(self):
        # Saturday 23:00 through Monday 01:00 covers Saturday and Monday
        assert count_selling_days(datetime(2024, 3, 9, 23), datetime(2024, 3, 11, 1)) == 2

    def test_mixed_datetime_and_date(self):
        assert count_selling_days(datetime(2024, 3, 10, 12), date(2024, 3, 31)) == 18
        assert count_selling_days(date(2024, 3, 10), datetime(2024, 3, 31, 8)) == 18

    def test_invalid_string_raises_parse_error(self):
        with pytest.raises(ParseError):
            count_selling_days("2024-02-30", "2024-03-01")


class TestParseDate:
    def test_date_passthrough(self):
        assert parse_date(date(2024, 3, 10)) == date(2024, 3, 10)

    def test_iso_string(self):
        assert parse_date(" 2024-03-10 ") == date(2024, 3, 10)

    def test_datetime_becomes_date(self):
        parsed = parse_date(datetime(2024, 3, 10, 22, 30))
        assert parsed == date(2024, 3, 10)
        assert type(parsed) is date

    @pytest.mark.parametrize("value", ["20240310", "2024-W10-7", "2024-03-10T00:00", "2024-070"])
    def test_only_dashed_calendar_form(self, value):
        with pytest.raises(ParseError):
            parse_date(value)

    @pytest.mark.parametrize("value", ["", "10/03/2024", "2024-13-01", "today", None])
    def test_invalid(self, value):
        with pytest.raises(ParseError):
            parse_date(value)

    def test_parse_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            parse_date("nope")


class TestMonthBounds:
    def test_first_day(self):
        assert first_day_of_month(date(2024, 3, 10)) == date(2024, 3, 1)

    def test_last_day_leap_february(self):
        assert last_day_of_month(date(2024, 2, 10)) == date(2024, 2, 29)

    def test_last_day_december(self):
        assert last_day_of_month(date(2023, 12, 5)) == date(2023, 12, 31)

    def test_sunday_is_not_selling_day(self):
        assert is_selling_day(date(2024, 3, 9))
        assert not is_selling_day(date(2024, 3, 10))
