"""
Free-form date parsing for statement cells.

Known layouts are tried first through an ordered strptime table (day-first
before month-first for ambiguous numeric dates); anything else is handed to
pandas, which falls back to dateutil.
"""

from __future__ import annotations

import re
import warnings
from datetime import datetime, timezone
from typing import Optional

import pandas as pd

DATE_FORMAT_PATTERNS = [
    ("%Y-%m-%dT%H:%M:%S", re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$")),
    ("%Y-%m-%d %H:%M:%S", re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")),
    ("%Y-%m-%d %H:%M", re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$")),
    ("%Y-%m-%d", re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")),
    ("%Y/%m/%d", re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$")),
    ("%Y.%m.%d", re.compile(r"^\d{4}\.\d{1,2}\.\d{1,2}$")),
    ("%d/%m/%Y", re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")),
    ("%m/%d/%Y", re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")),
    ("%d-%m-%Y", re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$")),
    ("%m-%d-%Y", re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$")),
    ("%d.%m.%Y", re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$")),
    ("%m.%d.%Y", re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$")),
    ("%d/%m/%y", re.compile(r"^\d{1,2}/\d{1,2}/\d{2}$")),
    ("%m/%d/%y", re.compile(r"^\d{1,2}/\d{1,2}/\d{2}$")),
    ("%d-%m-%y", re.compile(r"^\d{1,2}-\d{1,2}-\d{2}$")),
    ("%m-%d-%y", re.compile(r"^\d{1,2}-\d{1,2}-\d{2}$")),
    ("%d.%m.%y", re.compile(r"^\d{1,2}\.\d{1,2}\.\d{2}$")),
    ("%d %B %Y", re.compile(r"^\d{1,2}\s+[A-Za-z]+\s+\d{4}$")),
    ("%d %b %Y", re.compile(r"^\d{1,2}\s+[A-Za-z]{3}\s+\d{4}$")),
    ("%d %b %y", re.compile(r"^\d{1,2}\s+[A-Za-z]{3}\s+\d{2}$")),
    ("%d-%b-%Y", re.compile(r"^\d{1,2}-[A-Za-z]{3}-\d{4}$")),
    ("%d-%b-%y", re.compile(r"^\d{1,2}-[A-Za-z]{3}-\d{2}$")),
    ("%B %d %Y", re.compile(r"^[A-Za-z]+\s+\d{1,2}\s+\d{4}$")),
    ("%b %d %Y", re.compile(r"^[A-Za-z]{3}\s+\d{1,2}\s+\d{4}$")),
    ("%B %d, %Y", re.compile(r"^[A-Za-z]+\s+\d{1,2},\s+\d{4}$")),
    ("%b %d, %Y", re.compile(r"^[A-Za-z]{3}\s+\d{1,2},\s+\d{4}$")),
]

# pandas resolves these to the wall clock, which is never what a cell means.
RELATIVE_WORDS = {"now", "today", "tomorrow", "yesterday"}

# pandas fills a missing year with 1 or the current year; require one in the text.
YEAR_TOKEN_RE = re.compile(r"(?<!\d)(?:\d{4}|\d{2})(?!\d)")
MIN_YEAR = 1000


def normalize_datetime(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _parse_with_table(text: str) -> Optional[datetime]:
    for fmt, pattern in DATE_FORMAT_PATTERNS:
        if not pattern.fullmatch(text):
            continue
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _parse_with_pandas(text: str) -> Optional[datetime]:
    if not YEAR_TOKEN_RE.search(text):
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if not isinstance(parsed, pd.Timestamp) or pd.isna(parsed):
        return None
    if parsed.year < MIN_YEAR:
        return None
    return parsed.to_pydatetime()


def parse_freeform_date(text: str) -> Optional[datetime]:
    """Return the date/time ``text`` describes, or None when it is not a date."""
    text = (text or "").strip()
    if not text or text.lower() in RELATIVE_WORDS:
        return None

    parsed = _parse_with_table(text)
    if parsed is None:
        parsed = _parse_with_pandas(text)
    if parsed is None:
        return None
    return normalize_datetime(parsed)
