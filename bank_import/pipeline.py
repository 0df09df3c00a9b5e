"""
parse() — the full inference pipeline over one in-memory statement.

    lines -> separator -> records -> normalized records -> typed records
          -> header decision -> column types -> column role guesses
"""

from __future__ import annotations

from typing import Optional

from bank_import.coerce import coerce_records
from bank_import.errors import NoLines, NoRecords
from bank_import.guess import column_types, guess_columns
from bank_import.header import has_header
from bank_import.model import ParseResult
from bank_import.normalize import normalize_records
from bank_import.options import DEFAULT_OPTIONS, ParseOptions
from bank_import.tokenizer import detect_separator, split_lines, tokenize


def parse(text: str, options: Optional[ParseOptions] = None) -> ParseResult:
    """
    Parse delimited statement text of unknown dialect.

    Raises:
        NoLines             if the text has no non-blank lines.
        NoRecords           if tokenization produced nothing.
        FieldCountMismatch  in strict mode, when records differ in width.
        NoFields            if the normalized records have no fields.
    """
    options = options or DEFAULT_OPTIONS

    lines = split_lines(text)
    if not lines:
        raise NoLines()

    separator = detect_separator(lines, options)
    records = tokenize(lines, separator)
    if not records:
        raise NoRecords()

    records, warnings = normalize_records(records, strict=options.strict)
    num_columns = len(records[0])
    typed_records = coerce_records(records)

    header = None
    if has_header(typed_records):
        header = records[0]
        records = records[1:]
        typed_records = typed_records[1:]
        warnings.append("First row treated as a header")

    return ParseResult(
        header=header,
        records=records,
        typed_records=typed_records,
        num_columns=num_columns,
        column_types=column_types(typed_records),
        column_guesses=guess_columns(header, typed_records, options),
        separator=separator,
        warnings=warnings,
    )
