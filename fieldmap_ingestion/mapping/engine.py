"""
Conversion table: pure string-to-typed conversion keyed by field type tag.

Only the tags in CONVERTERS are converted; every other tag (text, picklist,
reference, integer, percent, and tags nobody has seen yet) keeps the
trimmed string unchanged. ZERO I/O.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any

from fieldmap_kernel.domain.schemas.base import FieldType, normalize_type_tag
from fieldmap_kernel.exceptions import (
    InvalidBooleanError,
    InvalidDateError,
    InvalidDatetimeError,
    InvalidDecimalError,
)

Converter = Callable[[str], Any]

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# Date, then 'T' or a single space, then at least HH:MM
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")


# -----------------------------------------------------------------------------
# Converters (pure; raise ConversionError subclasses)
# -----------------------------------------------------------------------------


def parse_datetime(text: str) -> datetime:
    """ISO 8601 date and time, optional seconds, fraction and offset or 'Z'."""
    if not _DATETIME_RE.match(text):
        raise InvalidDatetimeError(text, FieldType.DATETIME.value)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidDatetimeError(text, FieldType.DATETIME.value) from None


def parse_date(text: str) -> date:
    if not _DATE_RE.match(text):
        raise InvalidDateError(text, FieldType.DATE.value)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDateError(text, FieldType.DATE.value) from None


def parse_decimal(text: str, type_tag: str = FieldType.DOUBLE.value) -> Decimal:
    """
    Exact decimal; keeps the input's precision ("1234.50" stays 1234.50).

    ASCII digits only: Decimal() alone would also accept "1_000" and
    non-Latin digit scripts.
    """
    if "_" in text or not text.isascii():
        raise InvalidDecimalError(text, type_tag)
    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        raise InvalidDecimalError(text, type_tag) from None
    if not value.is_finite():
        raise InvalidDecimalError(text, type_tag)
    return value


def parse_currency(text: str) -> Decimal:
    return parse_decimal(text, FieldType.CURRENCY.value)


def parse_boolean(text: str, type_tag: str = FieldType.BOOLEAN.value) -> bool:
    low = text.lower()
    if low == "true":
        return True
    if low == "false":
        return False
    raise InvalidBooleanError(text, type_tag)


def parse_checkbox(text: str) -> bool:
    return parse_boolean(text, FieldType.CHECKBOX.value)


def as_text(text: str) -> str:
    return text


CONVERTERS: Mapping[str, Converter] = MappingProxyType({
    FieldType.DATETIME.value: parse_datetime,
    FieldType.DATE.value: parse_date,
    FieldType.CURRENCY.value: parse_currency,
    FieldType.DOUBLE.value: parse_decimal,
    FieldType.CHECKBOX.value: parse_checkbox,
    FieldType.BOOLEAN.value: parse_boolean,
})


def converter_for(
    type_tag: FieldType | str,
    converters: Mapping[str, Converter] = CONVERTERS,
) -> Converter:
    """Converter for a type tag; tags outside the table get as_text."""
    return converters.get(normalize_type_tag(type_tag), as_text)


def convert(
    text: str,
    type_tag: FieldType | str,
    converters: Mapping[str, Converter] = CONVERTERS,
) -> Any:
    """
    Convert already-trimmed text for a declared type.

    Raises:
        ConversionError: The text is not a valid literal for the type.
    """
    return converter_for(type_tag, converters)(text)

