"""
Line splitting, separator detection and quote-aware field tokenization.

Heuristic, not an RFC-4180 reader: no escaped quotes, no multi-line fields.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Optional, Sequence

from bank_import.options import DEFAULT_OPTIONS, ParseOptions

QUOTE_CHARS = ("'", '"')
LINE_BREAK_RE = re.compile(r"\r?\n")
DOUBLE_QUOTED_RE = re.compile(r'"[^"]+"')
SINGLE_QUOTED_RE = re.compile(r"'[^']+'")


def split_lines(text: str) -> list[str]:
    """Split on CRLF/LF, trim each line and drop the blank ones."""
    lines = (line.strip() for line in LINE_BREAK_RE.split(text))
    return [line for line in lines if line]


def strip_quoted(line: str) -> str:
    """Remove every quoted span (quotes included) from ``line``."""
    line = DOUBLE_QUOTED_RE.sub("", line)
    return SINGLE_QUOTED_RE.sub("", line)


def separator_counts(lines: Sequence[str], options: ParseOptions = DEFAULT_OPTIONS) -> Counter:
    sample = [strip_quoted(line) for line in lines[: options.sample_lines]]
    counts: Counter = Counter({sep: 0 for sep in options.separators})
    for line in sample:
        for sep in options.separators:
            counts[sep] += line.count(sep)
    return counts


def detect_separator(lines: Sequence[str], options: ParseOptions = DEFAULT_OPTIONS) -> str:
    """
    Pick the candidate separator that occurs most often in the sampled lines.

    Ties go to the earlier candidate, so an input with no candidate at all
    falls back to the first one (comma by default).
    """
    counts = separator_counts(lines, options)
    best = options.separators[0]
    for sep in options.separators:
        if counts[sep] > counts[best]:
            best = sep
    return best


def _clean_field(part: str) -> str:
    return part.strip().strip("'\"")


def tokenize_line(line: str, separator: str) -> list[str]:
    parts: list[str] = []
    quote_char: Optional[str] = None
    last_split = -1
    only_whitespace_since_sep = True

    for i, char in enumerate(line):
        if char in QUOTE_CHARS:
            if quote_char is not None and char == quote_char:
                quote_char = None
            elif quote_char is None and only_whitespace_since_sep:
                # A quote only opens a span at the start of a field; an
                # apostrophe inside unquoted text stays literal.
                quote_char = char

        if char != " ":
            only_whitespace_since_sep = False

        if char == separator and quote_char is None:
            parts.append(line[last_split + 1 : i])
            last_split = i
            only_whitespace_since_sep = True

    parts.append(line[last_split + 1 :])
    return [_clean_field(part) for part in parts]


def tokenize(lines: Sequence[str], separator: str) -> list[list[str]]:
    return [tokenize_line(line, separator) for line in lines]
