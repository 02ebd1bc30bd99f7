"""Tests for the converter table (fieldmap_ingestion/mapping/engine.py)."""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from fieldmap_ingestion.mapping.engine import (
    CONVERTERS,
    as_text,
    convert,
    converter_for,
    parse_boolean,
    parse_date,
    parse_datetime,
    parse_decimal,
)
from fieldmap_kernel.domain.schemas.base import FieldType
from fieldmap_kernel.exceptions import (
    ConversionError,
    InvalidBooleanError,
    InvalidDateError,
    InvalidDatetimeError,
    InvalidDecimalError,
)


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    @pytest.mark.parametrize(
        "text", ["not-a-date", "2024-02-30", "01/15/2024", "2024-1-5", "2024-01-15T00:00"]
    )
    def test_rejects(self, text):
        with pytest.raises(InvalidDateError) as exc_info:
            parse_date(text)
        assert exc_info.value.raw_value == text
        assert exc_info.value.type_tag == "date"


class TestParseDatetime:
    def test_space_separator(self):
        assert parse_datetime("2024-01-15 10:30:00") == datetime(2024, 1, 15, 10, 30)

    def test_t_separator_without_seconds(self):
        assert parse_datetime("2024-01-15T10:30") == datetime(2024, 1, 15, 10, 30)

    def test_zulu(self):
        assert parse_datetime("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=UTC
        )

    def test_offset(self):
        value = parse_datetime("2024-01-15T10:30:00+05:30")
        assert value.utcoffset() == timedelta(hours=5, minutes=30)

    def test_fraction(self):
        assert parse_datetime("2024-01-15 10:30:00.250").microsecond == 250000

    @pytest.mark.parametrize(
        "text", ["2024-01-15", "yesterday", "2024-01-15 25:00", "15/01/2024 10:30"]
    )
    def test_rejects(self, text):
        with pytest.raises(InvalidDatetimeError):
            parse_datetime(text)


class TestParseDecimal:
    def test_preserves_precision(self):
        value = parse_decimal("1234.50")
        assert value == Decimal("1234.50")
        assert str(value) == "1234.50"

    def test_negative_and_exponent(self):
        assert parse_decimal("-0.001") == Decimal("-0.001")
        assert parse_decimal("1E+3") == Decimal("1000")

    @pytest.mark.parametrize(
        "text",
        ["abc", "1,234.50", "NaN", "Infinity", "-inf", "$10", "1_000", "1_000.50"],
    )
    def test_rejects(self, text):
        with pytest.raises(InvalidDecimalError):
            parse_decimal(text)

    @pytest.mark.parametrize(
        "text",
        [
            "\u0661\u0662\u0663",  # Arabic-Indic 123
            "\uff11\uff12",  # fullwidth 12
            "\u0967.\u0966",  # Devanagari 1.0
        ],
    )
    def test_rejects_non_ascii_digits(self, text):
        with pytest.raises(InvalidDecimalError):
            parse_decimal(text)

    def test_underscore_rejected_through_assignment(self, assigner, crm_schema, diagnostics):
        record = crm_schema.new_record("Opportunity")
        assigner.assign(record, "1_000", "Opportunity", "Amount")
        assert "Amount" not in record
        assert diagnostics()[0]["error_code"] == "INVALID_DECIMAL"

    def test_currency_error_names_currency(self):
        with pytest.raises(InvalidDecimalError) as exc_info:
            convert("ten dollars", "currency")
        assert exc_info.value.type_tag == "currency"


class TestParseBoolean:
    @pytest.mark.parametrize("text", ["true", "TRUE", "True"])
    def test_true(self, text):
        assert parse_boolean(text) is True

    @pytest.mark.parametrize("text", ["false", "FALSE", "fAlSe"])
    def test_false(self, text):
        assert parse_boolean(text) is False

    @pytest.mark.parametrize("text", ["maybe", "yes", "1", "0", "t"])
    def test_rejects(self, text):
        with pytest.raises(InvalidBooleanError):
            parse_boolean(text)

    def test_checkbox_error_names_checkbox(self):
        with pytest.raises(InvalidBooleanError) as exc_info:
            convert("on", "checkbox")
        assert exc_info.value.type_tag == "checkbox"


class TestConverterTable:
    def test_table_contents(self):
        assert set(CONVERTERS) == {
            "datetime", "date", "currency", "double", "checkbox", "boolean",
        }

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            CONVERTERS["integer"] = int  # type: ignore[index]

    @pytest.mark.parametrize(
        "tag", ["string", "picklist", "reference", "integer", "percent", "multipicklist", "brand_new"]
    )
    def test_other_tags_store_text(self, tag):
        assert converter_for(tag) is as_text
        assert convert("42", tag) == "42"

    def test_tag_is_normalized(self):
        assert convert("TRUE", "BOOLEAN") is True
        assert convert("1.5", FieldType.DOUBLE) == Decimal("1.5")

    def test_custom_table(self):
        table = {**CONVERTERS, "integer": int}
        assert convert("42", "integer", table) == 42

    @pytest.mark.parametrize(
        ("tag", "text"),
        [
            ("date", "2024-01-15"),
            ("datetime", "2024-01-15T10:30:00+00:00"),
            ("currency", "1234.50"),
            ("double", "-0.125"),
            ("boolean", "true"),
            ("checkbox", "false"),
        ],
    )
    def test_converted_values_reparse(self, tag, text):
        value = convert(text, tag)
        rendered = str(value).lower() if isinstance(value, bool) else (
            value.isoformat() if isinstance(value, (date, datetime)) else str(value)
        )
        assert convert(rendered, tag) == value


class TestConversionErrors:
    def test_all_conversion_errors_share_base(self):
        for exc_type in (InvalidDateError, InvalidDatetimeError, InvalidDecimalError, InvalidBooleanError):
            assert issubclass(exc_type, ConversionError)


class TestPackageExports:
    def test_public_names(self):
        import fieldmap_ingestion.mapping as mapping

        assert sorted(mapping.__all__) == [
            "CONVERTERS",
            "Converter",
            "FieldAssigner",
            "convert",
            "converter_for",
        ]
        for name in mapping.__all__:
            assert hasattr(mapping, name)
