"""
Tests for lenient number and date parsing.
"""
import pytest
import pandas as pd
import numpy as np
import sys
from datetime import date, datetime, timezone, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.data.parsing import parse_number, parse_date, bucket_label


class TestParseNumber:
    """Tests for the numeric cell parser."""

    def test_plain_decimal(self):
        assert parse_number("1234.56") == pytest.approx(1234.56)

    def test_thousands_comma_with_decimal_point(self):
        assert parse_number("1,234.56") == pytest.approx(1234.56)

    def test_thousands_dot_with_decimal_comma(self):
        assert parse_number("1.234,56") == pytest.approx(1234.56)

    def test_decimal_comma(self):
        assert parse_number("1,56") == pytest.approx(1.56)

    def test_empty_and_garbage_are_zero(self):
        assert parse_number("") == 0
        assert parse_number("   ") == 0
        assert parse_number("abc") == 0
        assert parse_number(None) == 0

    def test_currency_symbols_stripped(self):
        assert parse_number("$ 99.90") == pytest.approx(99.9)
        assert parse_number("€12,50") == pytest.approx(12.5)

    def test_negative(self):
        assert parse_number("-45.5") == pytest.approx(-45.5)

    def test_misplaced_minus_is_zero(self):
        assert parse_number("12-3") == 0
        assert parse_number("-") == 0

    def test_ambiguous_thousands_comma_known_case(self):
        """'1,234' is read as a decimal comma (1.234), not 1234."""
        assert parse_number("1,234") == pytest.approx(1.234)

    def test_several_commas_without_point_is_zero(self):
        """Only the first comma becomes a point, so the rest makes it unparsable."""
        assert parse_number("1,234,567") == 0

    def test_native_numbers_pass_through(self):
        assert parse_number(42) == 42.0
        assert parse_number(3.5) == 3.5
        assert parse_number(np.float64(2.25)) == 2.25

    def test_nan_and_bool_are_zero(self):
        assert parse_number(float("nan")) == 0
        assert parse_number(np.nan) == 0
        assert parse_number(True) == 0


class TestParseDate:
    """Tests for date cell parsing."""

    def test_iso_date(self):
        assert parse_date("2024-03-15") == date(2024, 3, 15)

    def test_iso_datetime_utc(self):
        assert parse_date("2024-03-15T23:30:00Z") == date(2024, 3, 15)

    def test_offset_converted_to_utc_day(self):
        """01:00 at +02:00 is still the previous day in UTC."""
        assert parse_date("2024-03-15T01:00:00+02:00") == date(2024, 3, 14)

    def test_day_month_year_separators(self):
        assert parse_date("15.03.2024") == date(2024, 3, 15)
        assert parse_date("15/03/2024") == date(2024, 3, 15)
        assert parse_date("5-3-2024") == date(2024, 3, 5)

    def test_two_digit_year_is_2000s(self):
        assert parse_date("01/02/24") == date(2024, 2, 1)

    def test_invalid_calendar_date(self):
        assert parse_date("31/02/2024") is None

    def test_unparsable(self):
        assert parse_date("") is None
        assert parse_date("yesterday") is None
        assert parse_date(None) is None

    def test_native_values(self):
        assert parse_date(date(2024, 1, 2)) == date(2024, 1, 2)
        assert parse_date(pd.Timestamp("2024-01-02 10:00")) == date(2024, 1, 2)
        aware = datetime(2024, 1, 2, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        assert parse_date(aware) == date(2024, 1, 1)


class TestBucketLabel:

    def test_format(self):
        assert bucket_label(date(2024, 1, 5)) == "2024-01-05"

    def test_early_years_zero_padded(self):
        early = bucket_label(parse_date("1.1.999"))

        assert early == "0999-01-01"
        assert sorted([bucket_label(date(2024, 1, 1)), early])[0] == early
