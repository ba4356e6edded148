"""Tests for type conversion of raw request values."""

from datetime import datetime, timedelta, timezone

import pytest

from permitgate.validators.conversions import (
    ConversionFailed,
    FieldType,
    convert_value,
    parse_iso_datetime,
    to_boolean,
    to_number,
    to_string,
)


class TestStrings:

    def test_trim_when_converting(self):
        assert to_string("  a  ", trim=True) == "a"

    def test_untrimmed_without_conversion(self):
        with pytest.raises(ConversionFailed) as exc_info:
            to_string(" a", convert=False, trim=True)
        assert exc_info.value.code == "string.trim"

    def test_empty_is_presence_failure(self):
        with pytest.raises(ConversionFailed) as exc_info:
            to_string("")
        assert exc_info.value.code == "string.empty"
        assert exc_info.value.kind == "presence"

    @pytest.mark.parametrize("value", [None, 5, True, ["a"]])
    def test_non_strings_rejected(self, value):
        with pytest.raises(ConversionFailed) as exc_info:
            to_string(value)
        assert exc_info.value.code == "string.base"


class TestNumbers:

    @pytest.mark.parametrize("raw,expected", [("3", 3), (" 4 ", 4), ("-2", -2), ("2.5", 2.5), ("1e2", 100.0)])
    def test_numeric_strings(self, raw, expected):
        assert to_number(raw) == expected

    def test_integer_string_stays_int(self):
        assert isinstance(to_number("3"), int)

    @pytest.mark.parametrize("value", [
        True, False, "abc", "", "1,000", float("nan"), float("inf"), None, "１２",
    ])
    def test_rejected(self, value):
        with pytest.raises(ConversionFailed) as exc_info:
            to_number(value)
        assert exc_info.value.code == "number.base"

    def test_string_without_conversion(self):
        with pytest.raises(ConversionFailed):
            to_number("3", convert=False)


class TestBooleans:

    @pytest.mark.parametrize("raw,expected", [(True, True), ("true", True), ("FALSE", False), (" false ", False)])
    def test_accepted(self, raw, expected):
        assert to_boolean(raw) is expected

    @pytest.mark.parametrize("value", [1, 0, "yes", "", None])
    def test_rejected(self, value):
        with pytest.raises(ConversionFailed) as exc_info:
            to_boolean(value)
        assert exc_info.value.code == "boolean.base"


class TestDates:

    @pytest.mark.parametrize("text,expected", [
        ("2025-01-01", datetime(2025, 1, 1, tzinfo=timezone.utc)),
        ("2025-01-01T10:00", datetime(2025, 1, 1, 10, tzinfo=timezone.utc)),
        ("2025-01-01T10:00:00Z", datetime(2025, 1, 1, 10, tzinfo=timezone.utc)),
        ("2025-01-01T10:00:00.250Z", datetime(2025, 1, 1, 10, 0, 0, 250000, tzinfo=timezone.utc)),
        ("2025-01-01T10:00:00+05:30", datetime(2025, 1, 1, 10, tzinfo=timezone(timedelta(hours=5, minutes=30)))),
    ])
    def test_iso_forms(self, text, expected):
        assert parse_iso_datetime(text) == expected

    @pytest.mark.parametrize("text", [
        "2025/01/01",
        "Jan 1 2025",
        "2025-01-01 10:00:00",
        "20250101",
        "",
        "2025-01-01T10:00:00Z\n",
        "２０２５-01-01",
    ])
    def test_non_iso_text_is_format_failure(self, text):
        with pytest.raises(ConversionFailed) as exc_info:
            convert_value(FieldType.DATE, text)
        assert exc_info.value.code == "date.format"
        assert exc_info.value.kind == "format_violation"

    @pytest.mark.parametrize("value", [0, 1735722000, 1.5])
    def test_numbers_are_format_failures(self, value):
        with pytest.raises(ConversionFailed) as exc_info:
            convert_value(FieldType.DATE, value)
        assert exc_info.value.code == "date.format"

    @pytest.mark.parametrize("value", [True, None, {"y": 2025}])
    def test_other_types_are_type_failures(self, value):
        with pytest.raises(ConversionFailed) as exc_info:
            convert_value(FieldType.DATE, value)
        assert exc_info.value.code == "date.base"

    def test_datetime_passes_through_as_utc(self):
        assert convert_value(FieldType.DATE, datetime(2025, 1, 1)) == datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestArrays:

    def test_tuple_becomes_list(self):
        assert convert_value(FieldType.ARRAY, ("a", "b")) == ["a", "b"]

    def test_string_is_not_an_array(self):
        with pytest.raises(ConversionFailed) as exc_info:
            convert_value(FieldType.ARRAY, "a,b")
        assert exc_info.value.code == "array.base"
