"""
Per-field type coercion.

Priority is fixed: empty, plain number, locale-formatted number, date, text.
Numbers are tried before dates because permissive date parsing reads values
like ``4.05`` as day/month.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Sequence

from bank_import.dates import parse_freeform_date
from bank_import.model import TypedRecord, TypedValue, ValueType

DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def _to_float(text: str) -> Optional[float]:
    if not DECIMAL_RE.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def to_number(text: str) -> Optional[float]:
    """
    Parse a number written with thousands separators.

    The character three from the end decides the decimal separator:
    ``1,234.56`` drops the commas, ``1.234,56`` drops the dots and turns the
    comma into a point. Spaces are always removed.
    """
    text = text.replace(" ", "")
    decimal_sep = text[-3] if len(text) >= 3 else ""

    if decimal_sep == ".":
        text = text.replace(",", "")
    elif decimal_sep == ",":
        text = text.replace(".", "").replace(",", ".")

    return _to_float(text)


def parse_number(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return None
    number = _to_float(text)
    if number is not None:
        return number
    return to_number(text)


def coerce_value(field: str) -> TypedValue:
    text = field.strip()
    if text == "":
        return TypedValue.empty()

    number = parse_number(text)
    if number is not None:
        return TypedValue.number(number)

    date = parse_freeform_date(text)
    if date is not None:
        return TypedValue.date(date)

    return TypedValue.text(text)


def coerce_records(records: Sequence[Sequence[str]]) -> list[TypedRecord]:
    return [[coerce_value(field) for field in record] for record in records]


def render_value(value: TypedValue) -> str:
    """Render a typed value as text that coerces back to the same type."""
    if value.type is ValueType.EMPTY:
        return ""
    if value.type is ValueType.NUMBER:
        return repr(value.value)
    if value.type is ValueType.DATE:
        return value.value.isoformat()
    if value.type is ValueType.TEXT:
        return value.value
    raise TypeError(f"Unhandled value type: {value.type!r}")
