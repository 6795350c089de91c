"""Tests for the Duration value object and duration message conversion."""

from datetime import timedelta

import pytest

from alis_utils.core.duration import Duration, encode, parse
from alis_utils.core.errors import ValidationError
from alis_utils.core.messages import DurationMessage

# One hour expressed in every unit: six hours in total.
SIX_HOURS = Duration(
    hours=1,
    minutes=60,
    seconds=3600,
    milliseconds=3_600_000,
    microseconds=3_600_000_000,
    nanoseconds=3_600_000_000_000,
)


class TestDurationTotals:
    def test_totals_sum_every_unit(self):
        """Each total_* property collapses all components into one unit."""
        assert SIX_HOURS.total_hours == 6.0
        assert SIX_HOURS.total_minutes == 360.0
        assert SIX_HOURS.total_seconds == 21_600.0
        assert SIX_HOURS.total_milliseconds == 21_600_000.0
        assert SIX_HOURS.total_microseconds == 21_600_000_000.0
        assert SIX_HOURS.total_nanoseconds == 21_600_000_000_000

    def test_total_nanoseconds_is_exact_int(self):
        d = Duration(seconds=1, nanoseconds=1)
        assert d.total_nanoseconds == 1_000_000_001
        assert isinstance(d.total_nanoseconds, int)

    def test_zero_default(self):
        assert Duration().total_nanoseconds == 0

    @pytest.mark.parametrize("value", [1.5, "1", True])
    def test_non_integer_component_rejected(self, value):
        with pytest.raises(ValidationError):
            Duration(seconds=value)


class TestDurationStr:
    @pytest.mark.parametrize(
        "duration, expected",
        [
            (Duration(), "0s"),
            (Duration(hours=1, minutes=30), "1h 30m"),
            (Duration(seconds=5, milliseconds=250), "5s 250ms"),
            (Duration(minutes=1, seconds=1, milliseconds=5), "1m 1s 5ms"),
            (Duration(microseconds=3, nanoseconds=7), "3µs 7ns"),
        ],
    )
    def test_str_omits_zero_parts(self, duration, expected):
        assert str(duration) == expected


class TestParse:
    def test_parse_none(self):
        assert parse() is None
        assert parse(None) is None

    def test_parse_breaks_down_into_units(self):
        d = parse(DurationMessage(seconds=3_661, nanos=5_006_007))
        assert d == Duration(
            hours=1, minutes=1, seconds=1, milliseconds=5, microseconds=6, nanoseconds=7
        )

    def test_parse_encoded_six_hours(self):
        """Encoding then parsing keeps the total, normalised to whole hours."""
        parsed = parse(encode(SIX_HOURS))
        assert parsed == Duration(hours=6)
        assert parsed.total_hours == SIX_HOURS.total_hours

    def test_parse_accepts_duck_typed_message(self):
        class Wire:
            seconds = 90
            nanos = 0

        assert parse(Wire()) == Duration(minutes=1, seconds=30)

    def test_parse_negative(self):
        d = parse(DurationMessage(seconds=-1, nanos=-500_000_000))
        assert d == Duration(seconds=-1, milliseconds=-500)
        assert d.total_seconds == -1.5


class TestEncode:
    def test_encode_none(self):
        assert encode(None) is None

    def test_encode_six_hours(self):
        assert encode(SIX_HOURS) == DurationMessage(seconds=21_600, nanos=0)

    def test_encode_sub_second(self):
        assert encode(Duration(seconds=2, milliseconds=250)) == DurationMessage(
            seconds=2, nanos=250_000_000
        )

    def test_encode_negative_shares_sign(self):
        assert encode(Duration(milliseconds=-1_500)) == DurationMessage(
            seconds=-1, nanos=-500_000_000
        )

    def test_encode_rejects_non_duration(self):
        with pytest.raises(ValidationError):
            encode(timedelta(seconds=1))  # type: ignore[arg-type]

    def test_to_message(self):
        assert Duration(minutes=2).to_message() == DurationMessage(seconds=120, nanos=0)


class TestTimedelta:
    def test_to_timedelta(self):
        assert Duration(hours=1, milliseconds=5).to_timedelta() == timedelta(
            hours=1, milliseconds=5
        )

    def test_to_timedelta_truncates_nanoseconds(self):
        assert Duration(microseconds=1, nanoseconds=999).to_timedelta() == timedelta(
            microseconds=1
        )

    def test_from_timedelta(self):
        assert Duration.from_timedelta(timedelta(days=1, seconds=30)) == Duration(
            hours=24, seconds=30
        )

    def test_from_negative_timedelta(self):
        assert Duration.from_timedelta(timedelta(seconds=-90)) == Duration(
            minutes=-1, seconds=-30
        )
