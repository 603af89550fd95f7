"""
Tests for resolving single time strings against a reference timestamp.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest

import kaltime
from kaltime import TimeParser
from kaltime.exceptions import FormatMismatchError, InvalidFieldError, KaltimeError


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestParseWithReference:
    """Inputs resolved through the format catalog, with a UTC reference."""

    @pytest.mark.parametrize("date_string, expected", [
        ("2014-07-08", utc(2014, 7, 8)),
        ("2015-01-01 08:08", utc(2015, 1, 1, 8, 8)),
        ("2015-02-01 23:22:12", utc(2015, 2, 1, 23, 22, 12)),
        ("02-14", utc(2014, 2, 14)),
        ("02/14", utc(2014, 2, 14)),
        ("02-14 10:30:05", utc(2014, 2, 14, 10, 30, 5)),
        ("02-14 10:30", utc(2014, 2, 14, 10, 30)),
        ("21 10:30", utc(2014, 7, 21, 10, 30)),
        ("21 10h30", utc(2014, 7, 21, 10, 30)),
        ("21 10h", utc(2014, 7, 21, 10)),
        ("10:15:30", utc(2014, 7, 8, 10, 15, 30)),
        ("10:15", utc(2014, 7, 8, 10, 15)),
        ("9h30", utc(2014, 7, 8, 9, 30)),
        ("9h", utc(2014, 7, 8, 9)),
        ("30m", utc(2014, 7, 8, 9, 30)),
        ("30", utc(2014, 7, 8, 9, 30)),
        (" 30", utc(2014, 7, 8, 9, 30)),
        ("10: 15", utc(2014, 7, 8, 10, 15)),
    ])
    def test_catalog(self, reference, date_string, expected):
        result = kaltime.parse_with_reference(date_string, reference)
        assert result == expected
        assert result.utcoffset() == timedelta(0)

    def test_epoch(self, reference):
        result = kaltime.parse_with_reference("@1704150000", reference)
        assert result == utc(2024, 1, 1, 23, 0, 0)
        assert result.isoformat() == "2024-01-01T23:00:00+00:00"

    def test_epoch_ignores_reference_offset(self):
        reference = datetime(2014, 7, 8, 9, 10, 11, tzinfo=timezone(timedelta(hours=9)))
        result = kaltime.parse_with_reference("@1704150000", reference)
        assert result.utcoffset() == timedelta(0)
        assert result.timestamp() == 1704150000

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(hours=5, minutes=30), timedelta(hours=-8)])
    def test_empty_string_returns_reference(self, offset):
        reference = datetime(2014, 7, 8, 9, 10, 11, 42, tzinfo=timezone(offset))
        result = kaltime.parse_with_reference("", reference)
        assert result == reference
        assert result.utcoffset() == offset
        assert result.replace(tzinfo=None) == reference.replace(tzinfo=None)

    def test_result_has_fixed_offset(self, reference):
        result = kaltime.parse_with_reference("10:15", reference)
        assert isinstance(result.tzinfo, timezone)

    def test_idempotent(self, reference):
        first = kaltime.parse_with_reference("2015-02-01 23:22:12", reference)
        again = kaltime.parse_with_reference("2015-02-01 23:22:12", first)
        assert first == again

    def test_leftover_characters_do_not_match(self, reference):
        with pytest.raises(FormatMismatchError):
            kaltime.parse_with_reference("10:15 tomorrow", reference)

    def test_negative_epoch_is_not_in_catalog(self, reference):
        with pytest.raises(FormatMismatchError):
            kaltime.parse_with_reference("@-5", reference)

    def test_year_only_is_not_in_catalog(self, reference):
        with pytest.raises(FormatMismatchError):
            kaltime.parse_with_reference("2015", reference)

    def test_unknown_format(self, reference):
        with pytest.raises(FormatMismatchError) as excinfo:
            kaltime.parse_with_reference("toto", reference)
        assert str(excinfo.value) == 'Could not parse time string: "toto"'
        assert isinstance(excinfo.value, ValueError)

    @pytest.mark.parametrize("date_string", ["25:00", "24h", "61m", "02-30", "13/01"])
    def test_invalid_field(self, reference, date_string):
        with pytest.raises(InvalidFieldError):
            kaltime.parse_with_reference(date_string, reference)

    def test_day_invalid_for_borrowed_month(self):
        reference = utc(2015, 2, 10)
        with pytest.raises(InvalidFieldError):
            kaltime.parse_with_reference("31 10:00", reference)

    def test_epoch_out_of_range(self, reference):
        with pytest.raises(InvalidFieldError):
            kaltime.parse_with_reference("@99999999999999999", reference)

    def test_input_must_be_str(self, reference):
        with pytest.raises(TypeError):
            kaltime.parse_with_reference(1015, reference)

    def test_reference_must_be_aware(self):
        with pytest.raises(TypeError):
            kaltime.parse_with_reference("10:15", datetime(2014, 7, 8))

    def test_every_failure_is_a_kaltime_error(self, reference):
        for date_string in ("toto", "25:00"):
            with pytest.raises(KaltimeError):
                kaltime.parse_with_reference(date_string, reference)

    def test_logs_format_attempts(self, reference, caplog):
        caplog.set_level(logging.DEBUG, logger="kaltime.parser")
        kaltime.parse_with_reference("9h", reference)
        assert "Trying to parse '9h' with format '%Y-%m-%d'" in caplog.text
        assert "Parsed '9h' with format '%Hh'" in caplog.text


class TestParsePartial:
    """Single-format resolution, as used by the dispatch loop."""

    @pytest.mark.parametrize("date_string, date_format, expected", [
        ("2015", "%Y", utc(2015, 7, 8, 9, 10, 11)),
        ("2015-02", "%Y-%m", utc(2015, 2, 8, 9, 10, 11)),
        ("2015-02-01", "%Y-%m-%d", utc(2015, 2, 1, 9, 10, 11)),
        ("2015-02-01 23", "%Y-%m-%d %H", utc(2015, 2, 1, 23, 10, 11)),
        ("2015-02-01 23:22", "%Y-%m-%d %H:%M", utc(2015, 2, 1, 23, 22, 11)),
        ("2015-02-01 23:22:12", "%Y-%m-%d %H:%M:%S", utc(2015, 2, 1, 23, 22, 12)),
    ])
    def test_fill_from_reference(self, parser, reference, date_string, date_format, expected):
        assert parser.parse_partial(date_string, date_format, reference, False) == expected

    def test_empty_format_gives_reference(self, parser, reference):
        assert parser.parse_partial("", "", reference, False) == reference

    def test_fill_right_with_zeroes(self, parser, reference):
        assert parser.parse_partial("2015", "%Y", reference, True) == utc(2015, 1, 1)
        assert parser.parse_partial("12", "%H", reference, True) == utc(2014, 7, 8, 12)

    def test_errors(self, parser, reference):
        with pytest.raises(InvalidFieldError):
            parser.parse_partial("9999999999", "%Y", reference, False)
        with pytest.raises(FormatMismatchError):
            parser.parse_partial("2015 toto", "%Y %M", reference, False)


class TestNowReferences:
    def test_parse_utc_uses_utc_now(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        result = kaltime.parse_utc("")
        assert result.utcoffset() == timedelta(0)
        assert result >= before

    def test_parse_utc_epoch(self):
        assert kaltime.parse_utc("@0") == utc(1970, 1, 1)

    def test_parse_uses_local_now(self):
        result = kaltime.parse("", settings={"LOCAL_TIMEZONE": "Asia/Kolkata"})
        assert result.utcoffset() == timedelta(hours=5, minutes=30)

    def test_parse_local_time(self):
        result = kaltime.parse("12:00", settings={"LOCAL_TIMEZONE": "Asia/Kolkata"})
        assert result.utcoffset() == timedelta(hours=5, minutes=30)
        assert (result.hour, result.minute, result.second) == (12, 0, 0)

    def test_parser_now_is_fixed_offset(self):
        now = TimeParser(settings={"LOCAL_TIMEZONE": "UTC"}).now()
        assert isinstance(now.tzinfo, timezone)
        assert now.utcoffset() == timedelta(0)
