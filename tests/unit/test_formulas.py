# tests/unit/test_formulas.py
# Unit tests for indicator arithmetic and display formats
# These are CRITICAL - any change to formulas affects what operators see

from callmetrics.utils.formulas import (
    calc_data_quality,
    calc_efficiency,
    calc_mean,
    calc_minutes,
    format_clock,
    format_count,
    format_rating,
    is_valid_rating,
)


class TestCalcMean:
    """Test arithmetic mean."""

    def test_basic_mean(self):
        assert calc_mean([1, 2, 3]) == 2.0
        assert calc_mean([4, 5]) == 4.5

    def test_empty_input(self):
        assert calc_mean([]) == 0.0

    def test_accepts_generator(self):
        assert calc_mean(v for v in (300, 360)) == 330.0


class TestCalcMinutes:
    """Test seconds to minutes conversion (no rounding)."""

    def test_basic_conversion(self):
        assert calc_minutes(60) == 1.0
        assert calc_minutes(330) == 5.5
        assert calc_minutes(90) == 1.5

    def test_zero_seconds(self):
        assert calc_minutes(0) == 0.0

    def test_none_seconds(self):
        assert calc_minutes(None) == 0.0

    def test_keeps_fraction(self):
        # 65 seconds stays 1.0833..., not rounded to 1.1
        assert calc_minutes(65) == 65 / 60


class TestFormatCount:
    """Test thousands-grouped volumes."""

    def test_small_values(self):
        assert format_count(0) == "0"
        assert format_count(999) == "999"

    def test_pt_br_grouping(self):
        assert format_count(1234) == "1.234"
        assert format_count(1234567) == "1.234.567"

    def test_custom_separator(self):
        assert format_count(1234, ",") == "1,234"

    def test_integral_float(self):
        assert format_count(12.0) == "12"


class TestFormatClock:
    """Test the minutes -> clock display derived from the fractional minute."""

    def test_minutes_and_seconds(self):
        assert format_clock(5.5) == "5:30"
        assert format_clock(0.75) == "0:45"

    def test_zero(self):
        assert format_clock(0) == "0:00"

    def test_pads_seconds(self):
        # 1.25 minutes -> 1:15, 2.125 minutes -> 2:07
        assert format_clock(1.25) == "1:15"
        assert format_clock(2.125) == "2:07"

    def test_hours(self):
        assert format_clock(60) == "1:00:00"
        assert format_clock(61.5) == "1:01:30"
        assert format_clock(125.25) == "2:05:15"

    def test_seconds_are_floored(self):
        # 5.99 minutes -> 59.4 seconds -> floored to 59
        assert format_clock(5.99) == "5:59"


class TestFormatRating:

    def test_one_decimal(self):
        assert format_rating(4) == "4.0"
        assert format_rating(3.0) == "3.0"
        assert format_rating(4.66) == "4.7"

    def test_valid_range(self):
        assert is_valid_rating(0)
        assert is_valid_rating(5)
        assert not is_valid_rating(5.01)
        assert not is_valid_rating(-0.1)
        assert not is_valid_rating(float("nan"))


class TestCalcEfficiency:
    """Test the combined operator score."""

    def test_full_volume_half_time(self):
        # volume 1, quality 1, time 1 - 150/300 = 0.5
        assert calc_efficiency(10, 150, 5, 5) == 50.0

    def test_partial_volume(self):
        # volume 0.5, quality 0.8, time 1
        assert calc_efficiency(5, 0, 4, 4) == 40.0

    def test_volume_is_capped(self):
        assert calc_efficiency(50, 0, 5, 5) == 100.0

    def test_long_calls_zero_the_score(self):
        assert calc_efficiency(20, 600, 5, 5) == 0.0

    def test_no_ratings(self):
        assert calc_efficiency(10, 60, 0, 0) == 0.0


class TestCalcDataQuality:

    def test_percentage(self):
        assert calc_data_quality(9, 10) == 90.0
        assert calc_data_quality(1, 3) == 33.33

    def test_zero_total(self):
        assert calc_data_quality(0, 0) == 0.0
