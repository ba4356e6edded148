"""Type conversion — turns raw request values into the declared field type.

Conversion runs before constraints. A failure stops the field: the engine
reports the single conversion violation and skips the field's constraints.
"""

import math
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from permitgate.validators.models import ViolationKind

# ISO 8601 date, or date-time with optional seconds, fraction and offset
ISO_DATE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?",
    re.ASCII,
)

NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*", re.ASCII)

BOOLEAN_STRINGS = {"true": True, "false": False}


class FieldType(str, Enum):
    """Declared type of a field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY = "array"


class ConversionFailed(Exception):
    """Raised by a converter; always caught by the engine and turned into a Violation."""

    def __init__(self, code: str, kind: ViolationKind = ViolationKind.TYPE_MISMATCH, **params: Any):
        super().__init__(code)
        self.code = code
        self.kind = kind
        self.params = params


def to_string(value: Any, convert: bool = True, trim: bool = False) -> str:
    if not isinstance(value, str):
        raise ConversionFailed("string.base")
    if trim:
        if convert:
            value = value.strip()
        elif value != value.strip():
            raise ConversionFailed("string.trim", ViolationKind.PATTERN_MISMATCH)
    if value == "":
        raise ConversionFailed("string.empty", ViolationKind.PRESENCE)
    return value


def to_number(value: Any, convert: bool = True) -> float | int:
    # bool is an int subclass but never a number here
    if isinstance(value, bool):
        raise ConversionFailed("number.base")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise ConversionFailed("number.base")
        return value
    if convert and isinstance(value, str) and NUMERIC_RE.fullmatch(value):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            parsed = float(text)
        if not math.isfinite(parsed):
            raise ConversionFailed("number.base")
        return parsed
    raise ConversionFailed("number.base")


def to_boolean(value: Any, convert: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if convert and isinstance(value, str):
        key = value.strip().lower()
        if key in BOOLEAN_STRINGS:
            return BOOLEAN_STRINGS[key]
    raise ConversionFailed("boolean.base")


def parse_iso_datetime(text: str) -> datetime:
    """Parse an ISO 8601 string into an aware datetime (UTC when no offset is given).

    Raises:
        ConversionFailed: ``date.format`` when the text is not ISO 8601,
            ``date.base`` when it is shaped right but not a real date.
    """
    if not ISO_DATE_RE.fullmatch(text):
        raise ConversionFailed("date.format", ViolationKind.FORMAT_VIOLATION)
    normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        raise ConversionFailed("date.base")
    return _as_utc(parsed)


def to_date(value: Any, convert: bool = True) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, bool):
        raise ConversionFailed("date.base")
    if isinstance(value, (int, float)):
        # Timestamps are not an accepted date form
        raise ConversionFailed("date.format", ViolationKind.FORMAT_VIOLATION)
    if isinstance(value, str) and convert:
        return parse_iso_datetime(value)
    raise ConversionFailed("date.base")


def to_array(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ConversionFailed("array.base")


def convert_value(field_type: FieldType, value: Any, convert: bool = True, trim: bool = False) -> Any:
    """Convert a raw value to ``field_type``.

    Raises:
        ConversionFailed: when the value cannot be represented as the type
    """
    if field_type == FieldType.STRING:
        return to_string(value, convert=convert, trim=trim)
    if field_type == FieldType.NUMBER:
        return to_number(value, convert=convert)
    if field_type == FieldType.BOOLEAN:
        return to_boolean(value, convert=convert)
    if field_type == FieldType.DATE:
        return to_date(value, convert=convert)
    if field_type == FieldType.ARRAY:
        return to_array(value)
    raise ValueError(f"Unsupported field type: {field_type}")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
